"""Tests for the scan payload parser."""

import pytest

from pointman.exceptions import PointmanError
from pointman.payload import ScanPayload, parse_scan_payload


class TestParseScanPayload:
    """Well-formed payloads."""

    def test_parses_standard_payload(self):
        result = parse_scan_payload("QR ID: A1\nBatch ID: B1\nPoints: 50\nURL: http://x")
        assert result == ScanPayload(qr_id="A1", batch_id="B1", points=50)

    def test_any_line_order(self):
        result = parse_scan_payload("Points: 7\nURL: http://x\nBatch ID: B9\nQR ID: Q3")
        assert result == ("Q3", "B9", 7)

    def test_whitespace_is_trimmed(self):
        result = parse_scan_payload("   QR ID  :   A1  \n\tBatch ID:B1\t\r\nPoints:   50   ")
        assert result == ("A1", "B1", 50)

    def test_labels_are_case_insensitive(self):
        result = parse_scan_payload("qr id: A1\nBATCH ID: B1\npoints: 5")
        assert result == ("A1", "B1", 5)

    def test_first_duplicate_label_wins(self):
        result = parse_scan_payload(
            "QR ID: first\nQR ID: second\nBatch ID: B1\nPoints: 10\nPoints: 99"
        )
        assert result.qr_id == "first"
        assert result.points == 10

    def test_value_may_contain_colons(self):
        result = parse_scan_payload("QR ID: A:1\nBatch ID: B1\nPoints: 3")
        assert result.qr_id == "A:1"

    def test_unrelated_lines_ignored(self):
        result = parse_scan_payload("hello\nQR ID: A1\nnoise without colon\nBatch ID: B1\nPoints: 1")
        assert result == ("A1", "B1", 1)

    def test_custom_labels(self, settings):
        settings.POINTMAN = {"QR_ID_LABEL": "Code", "POINTS_LABEL": "Pts"}
        result = parse_scan_payload("Code: C1\nBatch ID: B1\nPts: 12")
        assert result == ("C1", "B1", 12)


class TestMalformedPayload:
    """Every malformed payload is rejected as a whole."""

    @pytest.mark.parametrize(
        "text",
        [
            "QR ID: A1\nBatch ID: B1\nURL: http://x",
            "Batch ID: B1\nPoints: 50",
            "QR ID: A1\nPoints: 50",
            "QR ID: \nBatch ID: B1\nPoints: 50",
        ],
    )
    def test_missing_required_line(self, text):
        with pytest.raises(PointmanError) as exc:
            parse_scan_payload(text)
        assert exc.value.code == "MALFORMED_PAYLOAD"

    @pytest.mark.parametrize("points", ["0", "-5", "abc", "12abc", "1.5", "1e3", ""])
    def test_invalid_points(self, points):
        with pytest.raises(PointmanError) as exc:
            parse_scan_payload(f"QR ID: A1\nBatch ID: B1\nPoints: {points}")
        assert exc.value.code == "MALFORMED_PAYLOAD"

    @pytest.mark.parametrize("points", ["2147483648", "99999999999999999999999"])
    def test_points_above_storage_limit(self, points):
        with pytest.raises(PointmanError) as exc:
            parse_scan_payload(f"QR ID: A1\nBatch ID: B1\nPoints: {points}")
        assert exc.value.code == "MALFORMED_PAYLOAD"
        assert exc.value.data["reason"] == "points out of range"

    def test_points_at_storage_limit(self):
        result = parse_scan_payload("QR ID: A1\nBatch ID: B1\nPoints: 2147483647")
        assert result.points == 2147483647

    @pytest.mark.parametrize("text", ["", "   \n  ", None, 42])
    def test_empty_or_not_text(self, text):
        with pytest.raises(PointmanError) as exc:
            parse_scan_payload(text)
        assert exc.value.code == "MALFORMED_PAYLOAD"

    def test_reason_is_reported(self):
        with pytest.raises(PointmanError) as exc:
            parse_scan_payload("QR ID: A1\nBatch ID: B1")
        assert exc.value.data["reason"] == "missing Points"

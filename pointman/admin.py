"""Pointman admin.

Balances and scan state are read-only here: points only change through
redemption and PointsService.adjust(), codes only through redemption.
"""

from django.contrib import admin
from django.utils.html import format_html

from pointman.models import Customer, PointTransaction, QRBatch, QRCode, Scheme


# ===========================================
# Customer Admin
# ===========================================


class PointTransactionInline(admin.TabularInline):
    model = PointTransaction
    extra = 0
    fields = ["transaction_type", "points", "balance_after", "description", "created_at"]
    readonly_fields = fields
    ordering = ["-created_at"]
    max_num = 20

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ["username", "name", "city", "phone", "email", "points"]
    search_fields = ["username", "name", "phone", "email"]
    readonly_fields = ["points", "created_at", "updated_at"]
    exclude = ["password"]
    inlines = [PointTransactionInline]


# ===========================================
# QRBatch Admin
# ===========================================


class QRCodeInline(admin.TabularInline):
    model = QRCode
    extra = 0
    fields = ["position", "qr_id", "qr_code_url", "is_scanned", "scanned_at", "scanned_by"]
    readonly_fields = ["is_scanned", "scanned_at", "scanned_by"]
    ordering = ["position"]


@admin.register(QRBatch)
class QRBatchAdmin(admin.ModelAdmin):
    list_display = [
        "batch_id",
        "points",
        "format",
        "size",
        "scan_progress",
        "is_active",
        "created_at",
    ]
    list_filter = ["is_active", "format"]
    search_fields = ["batch_id"]
    readonly_fields = ["created_at", "updated_at"]
    inlines = [QRCodeInline]
    actions = ["activate", "deactivate"]

    def scan_progress(self, obj):
        return format_html("{}/{}", obj.scanned_count, obj.total_count)

    scan_progress.short_description = "Scanned"

    @admin.action(description="Activate selected batches")
    def activate(self, request, queryset):
        queryset.update(is_active=True)

    @admin.action(description="Deactivate selected batches")
    def deactivate(self, request, queryset):
        queryset.update(is_active=False)


@admin.register(QRCode)
class QRCodeAdmin(admin.ModelAdmin):
    list_display = ["qr_id", "batch", "is_scanned", "scanned_at", "scanned_by"]
    list_filter = ["is_scanned", "batch__is_active"]
    search_fields = ["qr_id", "batch__batch_id"]
    raw_id_fields = ["batch", "scanned_by"]
    readonly_fields = ["is_scanned", "scanned_at", "scanned_by"]


# ===========================================
# Scheme Admin
# ===========================================


@admin.register(Scheme)
class SchemeAdmin(admin.ModelAdmin):
    list_display = ["title", "points_required", "created_at"]
    search_fields = ["title", "description"]


# ===========================================
# PointTransaction Admin (append-only)
# ===========================================


@admin.register(PointTransaction)
class PointTransactionAdmin(admin.ModelAdmin):
    list_display = [
        "created_at",
        "customer",
        "transaction_type",
        "points_display",
        "balance_after",
        "description",
    ]
    list_filter = ["transaction_type"]
    search_fields = ["customer__username", "description", "reference"]
    readonly_fields = [
        "customer",
        "transaction_type",
        "points",
        "balance_after",
        "description",
        "reference",
        "created_at",
        "created_by",
    ]
    date_hierarchy = "created_at"

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def points_display(self, obj):
        if obj.points > 0:
            return format_html('<span style="color:green">+{}</span>', obj.points)
        return format_html('<span style="color:red">{}</span>', obj.points)

    points_display.short_description = "Points"

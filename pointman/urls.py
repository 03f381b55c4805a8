from django.urls import path

from .views import CustomerPointsView, ScanView, SchemeListView

app_name = "pointman"

urlpatterns = [
    path("scan/", ScanView.as_view(), name="scan"),
    path(
        "customers/<str:username>/points/",
        CustomerPointsView.as_view(),
        name="customer-points",
    ),
    path("schemes/", SchemeListView.as_view(), name="schemes"),
]

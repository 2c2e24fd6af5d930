from django.urls import path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from . import views

urlpatterns = [
    path("health/", views.HealthView.as_view(), name="health"),
    path("status/", views.StatusView.as_view(), name="status"),
    path("regions/", views.RegionsView.as_view(), name="regions"),
    path("stops/", views.StopSearchView.as_view(), name="stops"),
    path("nearest-stop/", views.NearestStopView.as_view(), name="nearest-stop"),
    path("stop-stats/", views.StopStatsView.as_view(), name="stop-stats"),
    path("buses/", views.RouteListingView.as_view(), name="buses"),
    path("arrivals/", views.ArrivalsView.as_view(), name="arrivals"),
    path("arrivals/next/", views.NextArrivalsView.as_view(), name="arrivals-next"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
]

import django_filters

from gtfs.models import Stop


class StopFilter(django_filters.FilterSet):
    """Stops of one region, optionally narrowed by a name prefix."""

    region = django_filters.CharFilter(field_name="authority")
    q = django_filters.CharFilter(field_name="stop_name", lookup_expr="istartswith")

    class Meta:
        model = Stop
        fields = ["region", "q"]

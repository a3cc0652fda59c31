"""FilterSet for vehicle listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Vehicle


class VehicleFilterSet(django_filters.FilterSet):
    """Exact match on ``type`` and ``availability_status``; unknown choices are rejected."""

    type = django_filters.ChoiceFilter(field_name="type", choices=Vehicle.Type.choices)
    availability_status = django_filters.ChoiceFilter(
        field_name="availability_status",
        choices=Vehicle.Availability.choices,
    )
    name = django_filters.CharFilter(field_name="vehicle_name", lookup_expr="icontains")

    class Meta:
        model = Vehicle
        fields = ["type", "availability_status"]

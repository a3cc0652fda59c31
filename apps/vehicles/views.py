"""API views for the vehicle inventory."""

from __future__ import annotations

from rest_framework import status, viewsets  # type: ignore

from apps.users.api.permissions import IsAdminOrReadOnly
from shared.api.responses import success

from .inventory import DjangoVehicleInventory
from .serializers import VehicleInputSerializer, VehicleSerializer


class VehicleViewSet(viewsets.ViewSet):
    """Public read access, admin-only writes."""

    permission_classes = [IsAdminOrReadOnly]
    lookup_value_regex = r"\d+"
    inventory = DjangoVehicleInventory()

    def list(self, request):  # type: ignore
        vehicles = self.inventory.list(request.query_params)
        message = "Vehicles retrieved successfully" if vehicles else "No vehicles found"
        return success(VehicleSerializer(vehicles, many=True).data, message)

    def retrieve(self, request, pk=None):  # type: ignore
        vehicle = self.inventory.get(int(pk))
        return success(VehicleSerializer(vehicle).data, "Vehicle retrieved successfully")

    def create(self, request):  # type: ignore
        serializer = VehicleInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        vehicle = self.inventory.create(serializer.validated_data)
        return success(
            VehicleSerializer(vehicle).data,
            "Vehicle created successfully",
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, pk=None, partial=False):  # type: ignore
        serializer = VehicleInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        vehicle = self.inventory.update(int(pk), serializer.validated_data)
        return success(VehicleSerializer(vehicle).data, "Vehicle updated successfully")

    def partial_update(self, request, pk=None):  # type: ignore
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):  # type: ignore
        self.inventory.delete(int(pk))
        return success(message="Vehicle deleted successfully")

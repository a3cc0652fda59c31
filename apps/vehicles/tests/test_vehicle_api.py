"""Integration tests for the vehicle inventory endpoints."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.users.models import User
from apps.vehicles.models import Vehicle


class VehicleAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@example.com",
            name="Admin",
            password="AdminPass1",
            role=User.RoleChoices.ADMIN,
        )
        self.customer = User.objects.create_user(email="c@example.com", name="Carol", password="CarolPass1")
        self.car = Vehicle.objects.create(
            vehicle_name="Toyota Camry",
            type=Vehicle.Type.CAR,
            registration_number="CAR-1",
            daily_rent_price=Decimal("50.00"),
        )
        self.van = Vehicle.objects.create(
            vehicle_name="Ford Transit",
            type=Vehicle.Type.VAN,
            registration_number="VAN-1",
            daily_rent_price=Decimal("90.00"),
            availability_status=Vehicle.Availability.BOOKED,
        )
        self.list_url = reverse("vehicle-list")

    def payload(self, **overrides) -> dict:
        data = {
            "vehicle_name": "Yamaha R15",
            "type": "bike",
            "registration_number": "BIKE-99",
            "daily_rent_price": "25.50",
        }
        data.update(overrides)
        return data

    def test_anyone_can_list(self) -> None:
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([v["id"] for v in response.data["data"]], [self.car.pk, self.van.pk])
        first = response.data["data"][0]
        self.assertEqual(first["vehicle_name"], "Toyota Camry")
        self.assertEqual(first["daily_rent_price"], "50.00")
        self.assertEqual(first["availability_status"], "available")

    def test_filter_by_type_and_availability(self) -> None:
        response = self.client.get(self.list_url, {"type": "van"})
        self.assertEqual([v["id"] for v in response.data["data"]], [self.van.pk])

        response = self.client.get(self.list_url, {"availability_status": "available"})
        self.assertEqual([v["id"] for v in response.data["data"]], [self.car.pk])

    def test_unknown_filter_choice_is_rejected(self) -> None:
        response = self.client.get(self.list_url, {"type": "boat"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("type", response.data["errors"])

    def test_empty_result_message(self) -> None:
        response = self.client.get(self.list_url, {"type": "SUV"})

        self.assertEqual(response.data["data"], [])
        self.assertEqual(response.data["message"], "No vehicles found")

    def test_retrieve_and_not_found(self) -> None:
        response = self.client.get(reverse("vehicle-detail", args=[self.car.pk]))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["data"]["registration_number"], "CAR-1")

        response = self.client.get(reverse("vehicle-detail", args=[9999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)
        self.assertEqual(response.data["code"], "not_found")

    def test_admin_creates_vehicle(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(self.list_url, self.payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["data"]["availability_status"], "available")
        self.assertTrue(Vehicle.objects.filter(registration_number="BIKE-99").exists())

    def test_customer_cannot_create(self) -> None:
        self.client.force_authenticate(self.customer)

        response = self.client.post(self.list_url, self.payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)

    def test_anonymous_cannot_create(self) -> None:
        response = self.client.post(self.list_url, self.payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED, response.data)

    def test_duplicate_registration_is_conflict(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(self.list_url, self.payload(registration_number="CAR-1"), format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["message"], "Registration number already exists")

    def test_invalid_type_and_price(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.list_url,
            self.payload(type="boat", daily_rent_price="0"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "invalid_input")
        self.assertIn("type", response.data["errors"])
        self.assertIn("daily_rent_price", response.data["errors"])

    def test_admin_partially_updates(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.patch(
            reverse("vehicle-detail", args=[self.car.pk]),
            {"daily_rent_price": "55.00"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.car.refresh_from_db()
        self.assertEqual(self.car.daily_rent_price, Decimal("55.00"))
        self.assertEqual(self.car.vehicle_name, "Toyota Camry")

    def test_update_to_taken_registration_is_conflict(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.patch(
            reverse("vehicle-detail", args=[self.car.pk]),
            {"registration_number": "VAN-1"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)

    def test_delete_vehicle(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("vehicle-detail", args=[self.car.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["message"], "Vehicle deleted successfully")
        self.assertFalse(Vehicle.objects.filter(pk=self.car.pk).exists())

    def test_delete_with_active_booking_is_conflict(self) -> None:
        start = timezone.localdate() + timedelta(days=2)
        Booking.objects.create(
            customer=self.customer,
            vehicle=self.car,
            rent_start_date=start,
            rent_end_date=start + timedelta(days=1),
            total_price=Decimal("100.00"),
        )
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("vehicle-detail", args=[self.car.pk]))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["message"], "Cannot delete vehicle with active bookings")
        self.assertTrue(Vehicle.objects.filter(pk=self.car.pk).exists())

    def test_delete_with_only_finished_bookings(self) -> None:
        start = timezone.localdate() - timedelta(days=5)
        Booking.objects.create(
            customer=self.customer,
            vehicle=self.car,
            rent_start_date=start,
            rent_end_date=start + timedelta(days=1),
            total_price=Decimal("100.00"),
            status=Booking.Status.RETURNED,
        )
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("vehicle-detail", args=[self.car.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

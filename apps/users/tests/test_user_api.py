"""API tests for user management endpoints."""

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


class UserAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@example.com",
            name="Admin",
            password="AdminPass1",
            role=User.RoleChoices.ADMIN,
        )
        self.alice = User.objects.create_user(email="alice@example.com", name="Alice", password="AlicePass1")
        self.bob = User.objects.create_user(email="bob@example.com", name="Bob", password="BobPass12")
        self.list_url = reverse("user-list")

    def detail_url(self, user: User) -> str:
        return reverse("user-detail", args=[user.pk])

    def test_admin_lists_users(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        emails = [u["email"] for u in response.data["data"]]
        self.assertEqual(emails, ["admin@example.com", "alice@example.com", "bob@example.com"])

    def test_customer_cannot_list_users(self) -> None:
        self.client.force_authenticate(self.alice)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)
        self.assertEqual(response.data["code"], "forbidden")

    def test_anonymous_cannot_list_users(self) -> None:
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED, response.data)

    def test_customer_updates_own_profile(self) -> None:
        self.client.force_authenticate(self.alice)

        response = self.client.patch(self.detail_url(self.alice), {"name": "Alice Cooper"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.alice.refresh_from_db()
        self.assertEqual(self.alice.name, "Alice Cooper")

    def test_customer_cannot_update_someone_else(self) -> None:
        self.client.force_authenticate(self.alice)

        response = self.client.patch(self.detail_url(self.bob), {"name": "Hacked"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)

    def test_customer_cannot_change_own_role(self) -> None:
        self.client.force_authenticate(self.alice)

        response = self.client.patch(self.detail_url(self.alice), {"role": "admin"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)
        self.alice.refresh_from_db()
        self.assertEqual(self.alice.role, User.RoleChoices.CUSTOMER)

    def test_admin_changes_role(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.put(self.detail_url(self.bob), {"role": "admin"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["data"]["role"], "admin")

    def test_email_taken_is_conflict(self) -> None:
        self.client.force_authenticate(self.alice)

        response = self.client.patch(self.detail_url(self.alice), {"email": "BOB@example.com"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)

    def test_admin_deletes_user(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.delete(self.detail_url(self.bob))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertFalse(User.objects.filter(pk=self.bob.pk).exists())

    def test_cannot_delete_user_with_active_booking(self) -> None:
        vehicle = Vehicle.objects.create(
            vehicle_name="Kia Rio",
            type=Vehicle.Type.CAR,
            registration_number="KIA-1",
            daily_rent_price=Decimal("40.00"),
        )
        start = timezone.localdate() + timedelta(days=1)
        Booking.objects.create(
            customer=self.bob,
            vehicle=vehicle,
            rent_start_date=start,
            rent_end_date=start,
            total_price=Decimal("40.00"),
        )
        self.client.force_authenticate(self.admin)

        response = self.client.delete(self.detail_url(self.bob))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["message"], "Cannot delete user with active bookings")

    def test_customer_cannot_delete(self) -> None:
        self.client.force_authenticate(self.alice)

        response = self.client.delete(self.detail_url(self.bob))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)

    def test_delete_unknown_user(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("user-detail", args=[9999]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)

"""Shared fixtures for API tests."""
import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from customers.models import BusinessAccount
from organization.models import Department, Zone

User = get_user_model()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def zone(db):
    return Zone.objects.create(name="West")


@pytest.fixture
def department(zone):
    return Department.objects.create(name="Field Sales", zone=zone)


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email="admin@test.com",
        password="TestPass123!",
        name="Admin User",
        role="Admin",
    )


@pytest.fixture
def superuser(db):
    return User.objects.create_superuser(
        email="super@test.com",
        password="TestPass123!",
        name="Super Admin",
    )


@pytest.fixture
def leader_user(db):
    return User.objects.create_user(
        email="leader@test.com",
        password="TestPass123!",
        name="Team Leader",
        role="Team Leader",
    )


@pytest.fixture
def employee_user(db):
    return User.objects.create_user(
        email="employee@test.com",
        password="TestPass123!",
        name="Employee One",
        role="Employee",
    )


@pytest.fixture
def other_employee(db):
    return User.objects.create_user(
        email="employee2@test.com",
        password="TestPass123!",
        name="Employee Two",
        role="Employee",
    )


@pytest.fixture
def account(employee_user, zone):
    return BusinessAccount.objects.create(
        business_name="Acme Traders",
        contact_name="Ravi Kumar",
        contact_email="ravi@acme.test",
        contact_number="9876543210",
        gst_number="29ABCDE1234F1Z5",
        assigned_to=employee_user,
        zone=zone,
    )


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def super_client(superuser):
    client = APIClient()
    client.force_authenticate(user=superuser)
    return client


@pytest.fixture
def employee_client(employee_user):
    client = APIClient()
    client.force_authenticate(user=employee_user)
    return client

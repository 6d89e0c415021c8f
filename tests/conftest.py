from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from accounts.models import User
from customers.models import BusinessAccount
from organization.models import Department, Zone


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email="admin@test.com",
        password="testpass123",
        name="Admin User",
        role=User.Role.ADMIN,
    )


@pytest.fixture
def leader(db):
    return User.objects.create_user(
        email="leader@test.com",
        password="testpass123",
        name="Lena Leader",
        role=User.Role.TEAM_LEADER,
    )


@pytest.fixture
def other_leader(db):
    return User.objects.create_user(
        email="leader2@test.com",
        password="testpass123",
        name="Omar Leader",
        role=User.Role.TEAM_LEADER,
    )


@pytest.fixture
def employee(db):
    return User.objects.create_user(
        email="employee@test.com",
        password="testpass123",
        name="Eva Employee",
        role=User.Role.EMPLOYEE,
    )


@pytest.fixture
def other_employee(db):
    return User.objects.create_user(
        email="employee2@test.com",
        password="testpass123",
        name="Ethan Employee",
        role=User.Role.EMPLOYEE,
    )


@pytest.fixture
def zone(db):
    return Zone.objects.create(name="North", description="Northern region")


@pytest.fixture
def other_zone(db):
    return Zone.objects.create(name="South")


@pytest.fixture
def department(zone):
    return Department.objects.create(name="Sales", zone=zone)


@pytest.fixture
def other_department(other_zone):
    return Department.objects.create(name="Support", zone=other_zone)


@pytest.fixture
def business_account(employee, zone):
    return BusinessAccount.objects.create(
        business_name="Acme Traders",
        contact_name="Ravi Kumar",
        contact_email="ravi@acme.test",
        contact_number="9876543210",
        gst_number="29ABCDE1234F1Z5",
        assigned_to=employee,
        zone=zone,
    )


@pytest.fixture
def sample_items():
    return [
        {
            "description": "Safety helmet",
            "hsn_code": "6506",
            "quantity": Decimal("2"),
            "rate": Decimal("100"),
            "gst_percentage": Decimal("18"),
        },
    ]


@pytest.fixture
def followup_date():
    return timezone.now() + timedelta(days=3)

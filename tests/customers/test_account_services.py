import pytest

from core.models import AuditLog
from customers.models import AccountFollowUp, BusinessAccount
from customers.services import (
    DuplicateBusinessNameError,
    add_account_followup,
    add_account_note,
    create_account,
    delete_account_followup,
    soft_delete_account,
    update_account,
    update_account_followup,
)


def _account_data(**overrides):
    data = {
        "business_name": "Globex Industries",
        "contact_name": "Meera Shah",
        "contact_number": "9000000001",
        "source_type": "Referral",
        "type_of_lead": ["Regular"],
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
def test_create_account_defaults(admin_user):
    account = create_account(_account_data(), actor=admin_user)

    assert account.status == BusinessAccount.Status.ACTIVE
    assert account.is_customer is False
    assert AuditLog.objects.filter(action="ACCOUNT_CREATE", entity_id=str(account.pk)).exists()


@pytest.mark.django_db
def test_create_customer_sets_is_customer():
    account = create_account(_account_data(status=BusinessAccount.Status.CUSTOMER))

    assert account.is_customer is True


@pytest.mark.django_db
def test_duplicate_name_differing_in_case_names_the_assignee(business_account, employee):
    with pytest.raises(DuplicateBusinessNameError) as exc_info:
        create_account(_account_data(business_name="ACME traders"))

    error = exc_info.value
    assert error.existing == business_account
    assert "assigned to Eva Employee" in str(error)
    assert error.assigned_to == {"name": "Eva Employee", "role": "Employee"}
    assert BusinessAccount.objects.count() == 1


@pytest.mark.django_db
def test_duplicate_of_unassigned_account():
    create_account(_account_data())

    with pytest.raises(DuplicateBusinessNameError) as exc_info:
        create_account(_account_data(business_name="globex industries"))

    assert "an unassigned user" in str(exc_info.value)
    assert exc_info.value.assigned_to is None


@pytest.mark.django_db
def test_update_derives_is_customer(business_account):
    update_account(business_account, {"status": BusinessAccount.Status.CUSTOMER})
    business_account.refresh_from_db()
    assert business_account.is_customer is True

    update_account(business_account, {"status": BusinessAccount.Status.PIPELINE})
    business_account.refresh_from_db()
    assert business_account.is_customer is False


@pytest.mark.django_db
def test_rename_to_existing_name_is_rejected(business_account):
    other = create_account(_account_data())

    with pytest.raises(DuplicateBusinessNameError):
        update_account(other, {"business_name": "acme TRADERS"})

    other.refresh_from_db()
    assert other.business_name == "Globex Industries"


@pytest.mark.django_db
def test_rename_changing_only_case_is_allowed(business_account):
    update_account(business_account, {"business_name": "ACME Traders"})

    business_account.refresh_from_db()
    assert business_account.business_name == "ACME Traders"


@pytest.mark.django_db
def test_soft_delete_keeps_record(business_account):
    update_account(business_account, {"status": BusinessAccount.Status.CUSTOMER})

    soft_delete_account(business_account)

    account = BusinessAccount.objects.get(pk=business_account.pk)
    assert account.status == BusinessAccount.Status.CLOSED
    assert account.is_customer is False


@pytest.mark.django_db
def test_add_note_defaults_author(business_account, admin_user):
    add_account_note(business_account, "Met at expo", actor=admin_user)
    add_account_note(business_account, "Sent brochure", author="Reception")

    assert list(business_account.notes.values_list("author", flat=True)) == ["Admin User", "Reception"]


@pytest.mark.django_db
def test_followups_by_index_and_id(business_account, admin_user, followup_date):
    first = add_account_followup(business_account, {"date": followup_date, "note": "Call"}, actor=admin_user)
    second = add_account_followup(business_account, {"date": followup_date, "note": "Visit"}, actor=admin_user)

    assert first.status == AccountFollowUp.Status.PENDING
    assert first.added_by == admin_user

    updated = update_account_followup(business_account, "1", {"status": "completed"})
    assert updated.pk == second.pk
    assert updated.note == "Visit"

    delete_account_followup(business_account, str(first.pk))
    assert list(business_account.followups.all()) == [second]

    with pytest.raises(AccountFollowUp.DoesNotExist):
        update_account_followup(business_account, "1", {"note": "missing"})
    assert business_account.followups.get().note == "Visit"

from unittest.mock import AsyncMock

import pytest
from fastapi import HTTPException

from conftest import BASE_TIME, make_user
from models.application_model import ApplicationCreate
from models.enums import ApplicationStatus, RoleKind
from models.message_model import MessageResponse
from repos.application_repo import DuplicateApplicationError
from services.application_service import DEFAULT_CONTACT_MESSAGE, ApplicationService

OPPORTUNITY = {
    "id": "opp-1",
    "company_id": "carol",
    "title": "Backend Intern",
}


def application_record(status=ApplicationStatus.PENDING, **extra):
    record = {
        "id": "app-1",
        "user_id": "alice",
        "opportunity_id": "opp-1",
        "message": None,
        "status": status.value,
        "created_at": BASE_TIME,
        "updated_at": BASE_TIME,
    }
    record.update(extra)
    return record


@pytest.fixture
def repos():
    application_repo = AsyncMock()
    opportunity_repo = AsyncMock()
    profile_repo = AsyncMock()
    opportunity_repo.get_opportunity.return_value = dict(OPPORTUNITY)
    profile_repo.get_profile.return_value = {"id": "alice", "full_name": "Alice Doe"}
    application_repo.find_application.return_value = None
    application_repo.create_application.side_effect = lambda data: {**application_record(), **data}
    return application_repo, opportunity_repo, profile_repo


@pytest.fixture
def notification_service():
    return AsyncMock()


@pytest.fixture
def message_service():
    service = AsyncMock()
    service.send_reply.side_effect = lambda **kwargs: MessageResponse(
        id="msg-1",
        conversation_id="alice:carol",
        created_at=BASE_TIME,
        sender_id=kwargs["sender_id"],
        receiver_id=kwargs["receiver_id"],
        content=kwargs["content"],
        related_opportunity_id=kwargs["related_opportunity_id"],
    )
    return service


@pytest.fixture
def service(repos, notification_service, message_service):
    application_repo, opportunity_repo, profile_repo = repos
    return ApplicationService(application_repo, opportunity_repo, profile_repo, notification_service, message_service)


@pytest.mark.asyncio
async def test_apply_creates_application_and_notifies_company(service, repos, notification_service):
    application_repo, _, _ = repos

    result = await service.apply(make_user("alice"), ApplicationCreate(opportunity_id="opp-1", message="  Hire me  "))

    stored = application_repo.create_application.await_args.args[0]
    assert stored["message"] == "Hire me"
    assert stored["status"] == "pending"
    assert result.opportunity_title == "Backend Intern"
    notification_service.notify_application_received.assert_awaited_once_with(
        application_id="app-1",
        applicant_id="alice",
        applicant_name="Alice Doe",
        company_id="carol",
        opportunity_title="Backend Intern",
    )


@pytest.mark.asyncio
async def test_apply_requires_profile(service, repos):
    _, _, profile_repo = repos
    profile_repo.get_profile.return_value = None

    with pytest.raises(HTTPException) as exc_info:
        await service.apply(make_user("alice"), ApplicationCreate(opportunity_id="opp-1"))

    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_apply_to_missing_opportunity(service, repos):
    _, opportunity_repo, _ = repos
    opportunity_repo.get_opportunity.return_value = None

    with pytest.raises(HTTPException) as exc_info:
        await service.apply(make_user("alice"), ApplicationCreate(opportunity_id="nope"))

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_apply_twice_conflicts(service, repos, notification_service):
    application_repo, _, _ = repos
    application_repo.create_application.side_effect = DuplicateApplicationError()

    with pytest.raises(HTTPException) as exc_info:
        await service.apply(make_user("alice"), ApplicationCreate(opportunity_id="opp-1"))

    assert exc_info.value.status_code == 409
    notification_service.notify_application_received.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_status_notifies_applicant_on_change(service, repos, notification_service):
    application_repo, _, profile_repo = repos
    application_repo.get_application.return_value = application_record()
    application_repo.update_status.return_value = application_record(status=ApplicationStatus.ACCEPTED)
    profile_repo.get_profile.return_value = {"id": "carol", "company_name": "Carol Inc"}

    result = await service.update_status("app-1", "carol", ApplicationStatus.ACCEPTED)

    assert result.status == ApplicationStatus.ACCEPTED
    profile_repo.get_profile.assert_awaited_with("carol", RoleKind.ORGANIZATION)
    kwargs = notification_service.notify_application_status_changed.await_args.kwargs
    assert kwargs["applicant_id"] == "alice"
    assert kwargs["company_name"] == "Carol Inc"
    assert kwargs["new_status"] == ApplicationStatus.ACCEPTED


@pytest.mark.asyncio
async def test_update_status_without_change_stays_quiet(service, repos, notification_service):
    application_repo, _, _ = repos
    application_repo.get_application.return_value = application_record(status=ApplicationStatus.REJECTED)
    application_repo.update_status.return_value = application_record(status=ApplicationStatus.REJECTED)

    await service.update_status("app-1", "carol", ApplicationStatus.REJECTED)

    notification_service.notify_application_status_changed.assert_not_awaited()


@pytest.mark.asyncio
async def test_other_company_cannot_touch_application(service, repos):
    application_repo, _, _ = repos
    application_repo.get_application.return_value = application_record()

    with pytest.raises(HTTPException) as exc_info:
        await service.update_status("app-1", "mallory", ApplicationStatus.ACCEPTED)

    assert exc_info.value.status_code == 404
    application_repo.update_status.assert_not_awaited()


@pytest.mark.asyncio
async def test_contact_applicant_sends_message_about_opportunity(service, repos, message_service):
    application_repo, _, _ = repos
    application_repo.get_application.return_value = application_record()

    message = await service.contact_applicant("app-1", "carol")

    message_service.send_reply.assert_awaited_once_with(
        sender_id="carol",
        receiver_id="alice",
        content=DEFAULT_CONTACT_MESSAGE,
        related_opportunity_id="opp-1",
    )
    assert message.related_opportunity_id == "opp-1"


@pytest.mark.asyncio
async def test_dashboard_groups_applications_by_opportunity(service, repos):
    application_repo, opportunity_repo, profile_repo = repos
    opportunity_repo.list_company_opportunities.return_value = [
        dict(OPPORTUNITY),
        {"id": "opp-2", "company_id": "carol", "title": "Designer"},
    ]
    application_repo.list_for_opportunities.return_value = [
        application_record(),
        application_record(id="app-2", user_id="bob"),
    ]
    profile_repo.get_applicant_summaries.return_value = {}

    dashboard = await service.get_dashboard("carol")

    assert dashboard.total_applications == 2
    assert [group.total_applications for group in dashboard.applications_by_opportunity] == [2, 0]
    assert dashboard.applications_by_opportunity[1].opportunity.title == "Designer"

"""End-to-end flow over HTTP: register, vet, post, apply, decide."""

from __future__ import annotations

import pytest
from fastapi import status
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from src.infrastructure.db.models import Account

from tests.utils import auth_headers, create_posting

pytestmark = pytest.mark.asyncio


async def _register(client: AsyncClient, email: str, account_type: str = "alumni") -> dict:
    response = await client.post(
        "/auth/register",
        json={
            "email": email,
            "password": "password123",
            "full_name": "Test Person",
            "id_number": f"ID-{email}",
            "account_type": account_type,
        },
    )
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


async def test_full_lifecycle(async_client: AsyncClient, admin: Account) -> None:
    employer = await _register(async_client, "hr@company.com", account_type="employer")
    alumni = await _register(async_client, "grad@university.edu")
    employer_headers = {"Authorization": f"Bearer {employer['tokens']['access_token']}"}
    alumni_headers = {"Authorization": f"Bearer {alumni['tokens']['access_token']}"}
    employer_id = employer["account"]["id"]
    alumni_id = alumni["account"]["id"]

    assert employer["account"]["role"] == "alumni"
    assert employer["account"]["verification_status"] == "pending"

    # Pending accounts cannot post
    response = await async_client.post(
        "/jobs", json={"title": "Engineer", "company": "Co"}, headers=employer_headers
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {
        "ok": False,
        "reason": "NotVerified",
        "detail": "Not allowed to create-posting",
    }

    for account_id in (employer_id, alumni_id):
        response = await async_client.post(
            f"/admin/verifications/{account_id}/approve", headers=auth_headers(admin)
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "approved"

    response = await async_client.put(
        f"/accounts/{employer_id}/role", json={"role": "employer"}, headers=auth_headers(admin)
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["effective_role"] == "employer"

    response = await async_client.post(
        "/jobs", json={"title": "Engineer", "company": "Co"}, headers=employer_headers
    )
    assert response.status_code == status.HTTP_201_CREATED
    job_id = response.json()["id"]

    response = await async_client.post(
        f"/jobs/{job_id}/applications",
        json={"cover_letter": "Please hire me"},
        headers=alumni_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    application = response.json()
    assert application["status"] == "submitted"

    response = await async_client.post(
        f"/jobs/{job_id}/applications", json={}, headers=alumni_headers
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["reason"] == "AlreadyApplied"

    response = await async_client.get(f"/jobs/{job_id}/applications", headers=alumni_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["reason"] == "NotOwner"

    response = await async_client.get(f"/jobs/{job_id}/applications", headers=employer_headers)
    assert response.status_code == status.HTTP_200_OK
    assert [item["applicant_account_id"] for item in response.json()["applications"]] == [
        alumni_id
    ]

    response = await async_client.post(
        f"/applications/{application['id']}/decision",
        json={"outcome": "accepted"},
        headers=employer_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "accepted"

    response = await async_client.post(
        f"/applications/{application['id']}/decision",
        json={"outcome": "rejected"},
        headers=auth_headers(admin),
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["reason"] == "InvalidTransition"

    response = await async_client.get("/applications/mine", headers=alumni_headers)
    assert response.status_code == status.HTTP_200_OK
    mine = response.json()["applications"]
    assert [(item["job_title"], item["status"]) for item in mine] == [("Engineer", "accepted")]


async def test_browsing_is_open_to_anonymous_visitors(
    async_client: AsyncClient, session: AsyncSession, employer: Account
) -> None:
    posting = await create_posting(session, employer)

    response = await async_client.get("/jobs")
    assert response.status_code == status.HTTP_200_OK
    assert [job["id"] for job in response.json()["jobs"]] == [posting.id]

    response = await async_client.post(f"/jobs/{posting.id}/applications", json={})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


async def test_role_changes_require_admin(
    async_client: AsyncClient, employer: Account, approved_alumni: Account
) -> None:
    response = await async_client.put(
        f"/accounts/{approved_alumni.id}/role",
        json={"role": "admin"},
        headers=auth_headers(employer),
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["reason"] == "NotAdmin"

    response = await async_client.get(
        f"/accounts/{approved_alumni.id}/role", headers=auth_headers(employer)
    )
    assert response.json()["effective_role"] == "alumni"


async def test_token_for_unknown_account_is_rejected(async_client: AsyncClient) -> None:
    response = await async_client.get("/auth/me", headers=auth_headers("no-such-account"))

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


async def test_verification_lookup_defaults_to_pending(
    async_client: AsyncClient, pending_alumni: Account
) -> None:
    response = await async_client.get(
        f"/accounts/{pending_alumni.id}/verification", headers=auth_headers(pending_alumni)
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "pending"
    assert response.json()["id_number"] == "ID-pending"


async def test_admin_directory_and_stats(
    async_client: AsyncClient, admin: Account, pending_alumni: Account
) -> None:
    response = await async_client.get("/admin/accounts", headers=auth_headers(admin))
    assert response.status_code == status.HTTP_200_OK
    emails = {item["email"] for item in response.json()["accounts"]}
    assert emails == {admin.email, pending_alumni.email}

    response = await async_client.get(
        "/admin/verifications/pending", headers=auth_headers(admin)
    )
    assert [item["account_id"] for item in response.json()["verifications"]] == [
        pending_alumni.id
    ]

    response = await async_client.get("/stats/community")
    assert response.json() == {"total_accounts": 2, "alumni": 1, "employers": 0, "admins": 1}


async def test_owner_edits_and_closes_posting(
    async_client: AsyncClient, session: AsyncSession, employer: Account
) -> None:
    posting = await create_posting(session, employer)
    job_id = posting.id

    response = await async_client.patch(
        f"/jobs/{job_id}",
        json={"title": "Staff Engineer", "location": "Remote"},
        headers=auth_headers(employer),
    )
    assert response.status_code == status.HTTP_200_OK, response.text
    body = response.json()
    assert body["title"] == "Staff Engineer"
    assert body["location"] == "Remote"
    assert body["company"] == "Acme"

    response = await async_client.patch(
        f"/jobs/{job_id}", json={"is_active": False}, headers=auth_headers(employer)
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["is_active"] is False

    response = await async_client.get("/jobs")
    assert job_id not in [job["id"] for job in response.json()["jobs"]]

    response = await async_client.get("/jobs/mine", headers=auth_headers(employer))
    assert response.status_code == status.HTTP_200_OK
    assert [job["id"] for job in response.json()["jobs"]] == [job_id]


@pytest.mark.parametrize("field", ["title", "company", "is_active"])
async def test_patch_rejects_null_for_required_fields(
    async_client: AsyncClient, session: AsyncSession, employer: Account, field: str
) -> None:
    posting = await create_posting(session, employer)

    response = await async_client.patch(
        f"/jobs/{posting.id}", json={field: None}, headers=auth_headers(employer)
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    response = await async_client.get(f"/jobs/{posting.id}")
    assert response.json()["title"] == "Backend Engineer"
    assert response.json()["is_active"] is True


async def test_patch_clears_optional_fields(
    async_client: AsyncClient, session: AsyncSession, employer: Account
) -> None:
    posting = await create_posting(session, employer)

    response = await async_client.patch(
        f"/jobs/{posting.id}",
        json={"location": None, "description": None},
        headers=auth_headers(employer),
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["location"] is None


async def test_patch_by_non_owner_is_forbidden(
    async_client: AsyncClient,
    session: AsyncSession,
    employer: Account,
    approved_alumni: Account,
) -> None:
    posting = await create_posting(session, employer)

    response = await async_client.patch(
        f"/jobs/{posting.id}", json={"title": "Hijacked"}, headers=auth_headers(approved_alumni)
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["reason"] == "NotOwner"


async def test_member_directory_requires_sign_in_and_hides_contacts(
    async_client: AsyncClient, approved_alumni: Account, pending_alumni: Account
) -> None:
    response = await async_client.get("/directory")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

    response = await async_client.get("/directory", headers=auth_headers(pending_alumni))
    assert response.status_code == status.HTTP_200_OK
    members = response.json()["members"]
    assert [member["account_id"] for member in members] == [approved_alumni.id]
    assert "email" not in members[0]
    assert "id_number" not in members[0]

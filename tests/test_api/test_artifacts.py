from sqlalchemy import select

from lume import models
from lume.crud import artifacts as artifacts_crud
from lume.schemas.artifact_schema import ArtifactCreate
from tests.constants import CONVERSATION_ID, OTHER_USER_ID, OWNER_ID
from tests.mock_classes import ANONYMOUS, BaseAsyncTestCase


class TestArtifactsEndpoints(BaseAsyncTestCase):
    async def test_get_artifact(self, owned_document):
        response = await self.make_request(
            "get", f"/api/v1/artifacts/{owned_document.id}"
        )
        message = self.get_assertion_message(
            response.text, "Cannot get artifact:"
        )
        assert response.status_code == self.status_codes.HTTP_200_OK, message
        data = response.json()
        assert data["id"] == owned_document.id
        assert data["ownerId"] == OWNER_ID
        assert data["conversationId"] == CONVERSATION_ID
        assert data["version"] == "1"
        assert data["content"] == {"title": "Draft"}
        assert "createdAt" in data and "updatedAt" in data

    async def test_get_missing_artifact(self):
        response = await self.make_request(
            "get", "/api/v1/artifacts/artifact_missing"
        )
        assert response.status_code == self.status_codes.HTTP_404_NOT_FOUND

    async def test_get_foreign_artifact(self, owned_document):
        response = await self.make_request(
            "get",
            f"/api/v1/artifacts/{owned_document.id}",
            user_id=OTHER_USER_ID,
        )
        assert response.status_code == self.status_codes.HTTP_403_FORBIDDEN

    async def test_get_public_artifact_anonymously(self, public_document):
        response = await self.make_request(
            "get",
            f"/api/v1/artifacts/{public_document.id}",
            user_id=ANONYMOUS,
        )
        assert response.status_code == self.status_codes.HTTP_200_OK
        assert response.json()["ownerId"] is None

    async def test_invalid_token(self, public_document):
        response = await self.make_request(
            "get",
            f"/api/v1/artifacts/{public_document.id}",
            headers={"Authorization": "Bearer not-a-token"},
            user_id=ANONYMOUS,
        )
        assert response.status_code == self.status_codes.HTTP_401_UNAUTHORIZED

    async def test_update_artifact(
        self, owned_document, async_session_factory
    ):
        response = await self.make_request(
            "patch",
            f"/api/v1/artifacts/{owned_document.id}",
            json={"content": {"title": "Final"}},
        )
        message = self.get_assertion_message(
            response.text, "Cannot update artifact:"
        )
        assert response.status_code == self.status_codes.HTTP_200_OK, message
        data = response.json()
        assert data["version"] == "2"
        assert data["content"] == {"title": "Final"}

        async with async_session_factory() as session:
            db_artifact = (
                await session.execute(
                    select(models.Artifact).where(
                        models.Artifact.id == owned_document.id
                    )
                )
            ).scalars().first()
        assert db_artifact.version == "2"
        assert db_artifact.updated_at >= owned_document.updated_at

    async def test_update_without_content(self, owned_document):
        response = await self.make_request(
            "patch",
            f"/api/v1/artifacts/{owned_document.id}",
            json={},
        )
        assert response.status_code == self.status_codes.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Missing content"

    async def test_update_with_invalid_content(self, owned_slides):
        response = await self.make_request(
            "patch",
            f"/api/v1/artifacts/{owned_slides.id}",
            json={"content": {"outline": {"pptTitle": ""}}},
        )
        assert response.status_code == self.status_codes.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["detail"] == "Invalid slidesOutline content"
        assert data["errors"]

        response = await self.make_request(
            "get", f"/api/v1/artifacts/{owned_slides.id}"
        )
        assert response.json()["version"] == "1"
        assert response.json()["content"] == owned_slides.content

    async def test_update_missing_artifact(self):
        response = await self.make_request(
            "patch",
            "/api/v1/artifacts/artifact_missing",
            json={"content": {"title": "Final"}},
        )
        assert response.status_code == self.status_codes.HTTP_404_NOT_FOUND

    async def test_update_foreign_artifact(self, owned_document):
        response = await self.make_request(
            "patch",
            f"/api/v1/artifacts/{owned_document.id}",
            json={"content": {"title": "Hijacked"}},
            user_id=OTHER_USER_ID,
        )
        assert response.status_code == self.status_codes.HTTP_403_FORBIDDEN

    async def test_update_public_artifact(self, public_document):
        response = await self.make_request(
            "patch",
            f"/api/v1/artifacts/{public_document.id}",
            json={"content": {"title": "Edited"}},
        )
        assert response.status_code == self.status_codes.HTTP_403_FORBIDDEN

    async def test_delete_artifact(self, owned_document):
        response = await self.make_request(
            "delete", f"/api/v1/artifacts/{owned_document.id}"
        )
        assert response.status_code == self.status_codes.HTTP_204_NO_CONTENT
        assert response.content == b""

        response = await self.make_request(
            "get", f"/api/v1/artifacts/{owned_document.id}"
        )
        assert response.status_code == self.status_codes.HTTP_404_NOT_FOUND

    async def test_delete_missing_artifact(self):
        response = await self.make_request(
            "delete", "/api/v1/artifacts/artifact_missing"
        )
        assert response.status_code == self.status_codes.HTTP_404_NOT_FOUND

    async def test_delete_foreign_artifact(self, owned_document):
        response = await self.make_request(
            "delete",
            f"/api/v1/artifacts/{owned_document.id}",
            user_id=OTHER_USER_ID,
        )
        assert response.status_code == self.status_codes.HTTP_403_FORBIDDEN

    async def test_conversation_artifacts(self, conversation_artifacts):
        response = await self.make_request(
            "get", f"/api/v1/artifacts/conversation/{CONVERSATION_ID}"
        )
        assert response.status_code == self.status_codes.HTTP_200_OK
        assert [item["id"] for item in response.json()] == [
            "artifact_new_owned",
            "artifact_public",
            "artifact_old_owned",
        ]

    async def test_conversation_artifacts_anonymously(
        self,
        conversation_artifacts,
    ):
        response = await self.make_request(
            "get",
            f"/api/v1/artifacts/conversation/{CONVERSATION_ID}",
            user_id=ANONYMOUS,
        )
        assert response.status_code == self.status_codes.HTTP_200_OK
        assert [item["id"] for item in response.json()] == ["artifact_public"]

    async def test_empty_conversation(self):
        response = await self.make_request(
            "get", "/api/v1/artifacts/conversation/unknown"
        )
        assert response.status_code == self.status_codes.HTTP_200_OK
        assert response.json() == []

    async def test_update_opaque_artifact_with_empty_content(
        self, async_session
    ):
        db_artifact = await artifacts_crud.create_artifact(
            async_session,
            ArtifactCreate(
                conversation_id=CONVERSATION_ID,
                owner_id=OWNER_ID,
                type="spreadsheet",
                content={"cells": [[1]]},
            ),
        )
        artifact_id = db_artifact.id
        for content in ({}, []):
            response = await self.make_request(
                "patch",
                f"/api/v1/artifacts/{artifact_id}",
                json={"content": content},
            )
            message = self.get_assertion_message(
                response.text, "Cannot update artifact with empty content:"
            )
            assert (
                response.status_code == self.status_codes.HTTP_200_OK
            ), message
            assert response.json()["content"] == content
        assert response.json()["version"] == "3"

    async def test_update_with_null_content(self, owned_document):
        response = await self.make_request(
            "patch",
            f"/api/v1/artifacts/{owned_document.id}",
            json={"content": None},
        )
        assert response.status_code == self.status_codes.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Missing content"

    async def test_timestamps_have_utc_offset(self, conversation_artifacts):
        response = await self.make_request(
            "get", "/api/v1/artifacts/artifact_old_owned"
        )
        assert response.status_code == self.status_codes.HTTP_200_OK
        data = response.json()
        assert data["createdAt"] == "2025-12-01T12:00:00+00:00"
        assert data["updatedAt"] == "2025-12-01T12:00:00+00:00"

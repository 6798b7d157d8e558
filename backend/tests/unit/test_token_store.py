"""Unit tests for the project and token store"""
import pytest

from tokenforge.schemas.token import TokenFormData
from tokenforge.services.configuration import refresh_previews
from tokenforge.services.token_io import to_document
from tokenforge.services.token_store import RecordNotFoundError, TokenStore

from fixtures.sample_tokens import multi_block_configuration, sample_configuration


def _document(configuration):
    return to_document(refresh_previews(TokenFormData.model_validate(configuration)))


class TestProjects:
    """Tests for project records"""

    @pytest.mark.asyncio
    async def test_create_and_get(self, db_session):
        store = TokenStore(db_session)
        created = await store.create_project("Acme", "Acme token suite")
        fetched = await store.get_project(created["id"])
        assert fetched["name"] == "Acme"
        assert fetched["description"] == "Acme token suite"
        assert fetched["tokens"] == []
        assert fetched["createdAt"]

    @pytest.mark.asyncio
    async def test_list_newest_first(self, db_session):
        store = TokenStore(db_session)
        first = await store.create_project("First")
        second = await store.create_project("Second")
        ids = [p["id"] for p in await store.list_projects()]
        assert ids == [second["id"], first["id"]]

    @pytest.mark.asyncio
    async def test_update(self, db_session):
        store = TokenStore(db_session)
        project = await store.create_project("Old")
        updated = await store.update_project(project["id"], {"name": "New"})
        assert updated["name"] == "New"

    @pytest.mark.asyncio
    async def test_delete_removes_tokens(self, db_session):
        store = TokenStore(db_session)
        project = await store.create_project("Doomed")
        token = await store.create_token(project["id"], _document(sample_configuration("ERC20")))
        await store.delete_project(project["id"])
        with pytest.raises(RecordNotFoundError):
            await store.get_project(project["id"])
        with pytest.raises(RecordNotFoundError):
            await store.get_token(token["id"])

    @pytest.mark.asyncio
    async def test_missing_project(self, db_session):
        store = TokenStore(db_session)
        with pytest.raises(RecordNotFoundError) as exc_info:
            await store.get_project(404)
        assert exc_info.value.kind == "Project"


class TestTokens:
    """Tests for token configuration records"""

    @pytest.mark.asyncio
    async def test_round_trip_unchanged(self, db_session):
        """A saved configuration reads back as the same form"""
        store = TokenStore(db_session)
        project = await store.create_project("Acme")
        document = _document(multi_block_configuration())

        record = await store.create_token(project["id"], document)
        fetched = await store.get_token(record["id"])

        assert fetched["projectId"] == project["id"]
        assert TokenFormData.model_validate(fetched) == TokenFormData.model_validate(document)
        assert {k: fetched[k] for k in document} == document

    @pytest.mark.asyncio
    async def test_absent_optionals_stay_absent(self, db_session):
        store = TokenStore(db_session)
        project = await store.create_project("Acme")
        document = to_document(TokenFormData.model_validate(sample_configuration("ERC20")))
        record = await store.create_token(project["id"], document)
        assert "approvals" not in record
        assert "reviewers" not in record
        assert "contractPreview" not in record

    @pytest.mark.asyncio
    async def test_project_lists_token_ids(self, db_session):
        store = TokenStore(db_session)
        project = await store.create_project("Acme")
        first = await store.create_token(project["id"], _document(sample_configuration("ERC20")))
        second = await store.create_token(project["id"], _document(sample_configuration("ERC721")))
        assert (await store.get_project(project["id"]))["tokens"] == [first["id"], second["id"]]
        assert [t["id"] for t in await store.list_tokens(project["id"])] == [first["id"], second["id"]]

    @pytest.mark.asyncio
    async def test_partial_update(self, db_session):
        store = TokenStore(db_session)
        project = await store.create_project("Acme")
        record = await store.create_token(project["id"], _document(sample_configuration("ERC20")))
        updated = await store.update_token(record["id"], {"status": "PENDING_REVIEW", "unknown": 1})
        assert updated["status"] == "PENDING_REVIEW"
        assert updated["name"] == record["name"]
        assert "unknown" not in updated

    @pytest.mark.asyncio
    async def test_token_needs_existing_project(self, db_session):
        store = TokenStore(db_session)
        with pytest.raises(RecordNotFoundError):
            await store.create_token(999, _document(sample_configuration("ERC20")))

    @pytest.mark.asyncio
    async def test_delete(self, db_session):
        store = TokenStore(db_session)
        project = await store.create_project("Acme")
        record = await store.create_token(project["id"], _document(sample_configuration("ERC20")))
        await store.delete_token(record["id"])
        assert await store.list_tokens(project["id"]) == []
        with pytest.raises(RecordNotFoundError):
            await store.delete_token(record["id"])

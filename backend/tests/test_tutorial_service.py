"""
Tutorials API — Tutorial Service Unit Tests
=============================================

What:  Tests for TutorialService business logic.
How:   Uses mock DB sessions (no real database).

What we test:
    ✅ Listing: query results shaped into the envelope, bad page/size rejected
    ✅ Create: flush assigns the id, location built from it
    ✅ Find one / update / delete: not-found and success paths
    ✅ SQLAlchemy errors translated into DatabaseError with the right message
    ✅ Update validation happens before any query
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.schemas.tutorial import TutorialCreate, TutorialUpdate
from app.services.tutorial_service import TutorialService, parse_tutorial_id


def _tutorial(data):
    tutorial = MagicMock()
    for key, value in data.items():
        setattr(tutorial, key, value)
    return tutorial


def _count_result(count):
    result = MagicMock()
    result.scalar.return_value = count
    return result


def _rows_result(rows):
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows
    return result


def _rowcount_result(rowcount):
    result = MagicMock()
    result.rowcount = rowcount
    return result


def _operational_error():
    return OperationalError("SELECT 1", {}, Exception("database is locked"))


class TestParseTutorialId:

    @pytest.mark.parametrize("raw, expected", [("1", 1), ("42", 42), ("007", 7)])
    def test_numeric_ids(self, raw, expected):
        assert parse_tutorial_id(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["abc", "published", "-1", "0", "", "1.5", str(2**63), "1_0", "+5", " 5", "5\n", "٣"],
    )
    def test_ids_no_row_can_have(self, raw):
        assert parse_tutorial_id(raw) is None


class TestTutorialServiceList:
    """Tests for find_all / find_all_published."""

    def setup_method(self):
        self.service = TutorialService()

    @pytest.mark.asyncio
    async def test_find_all_empty(self, mock_db_session):
        mock_db_session.execute.side_effect = [_count_result(0), _rows_result([])]

        result = await self.service.find_all(mock_db_session)

        assert result.total_items == 0
        assert result.tutorials == []
        assert result.total_pages == 0
        assert result.current_page == 0

    @pytest.mark.asyncio
    async def test_find_all_shapes_envelope(self, mock_db_session, sample_tutorial_data):
        rows = [_tutorial({**sample_tutorial_data, "id": i}) for i in (4, 5, 6)]
        mock_db_session.execute.side_effect = [_count_result(8), _rows_result(rows)]

        result = await self.service.find_all(mock_db_session, page="1", size="3")

        assert result.total_items == 8
        assert [t.id for t in result.tutorials] == [4, 5, 6]
        assert result.total_pages == 3
        # currentPage reports the offset (page 1 × size 3)
        assert result.current_page == 3

    @pytest.mark.asyncio
    async def test_find_all_applies_title_filter(self, mock_db_session):
        mock_db_session.execute.side_effect = [_count_result(0), _rows_result([])]

        await self.service.find_all(mock_db_session, title="Node")

        count_query = mock_db_session.execute.await_args_list[0].args[0]
        rows_query = mock_db_session.execute.await_args_list[1].args[0]
        assert "LIKE" in str(count_query).upper()
        assert "LIKE" in str(rows_query).upper()
        assert "%Node%" in count_query.compile().params.values()

    @pytest.mark.asyncio
    async def test_find_all_without_title_has_no_where(self, mock_db_session):
        mock_db_session.execute.side_effect = [_count_result(0), _rows_result([])]

        await self.service.find_all(mock_db_session, title="")

        rows_query = mock_db_session.execute.await_args_list[1].args[0]
        assert "WHERE" not in str(rows_query).upper()

    @pytest.mark.asyncio
    async def test_find_all_published_filters_on_published(self, mock_db_session):
        mock_db_session.execute.side_effect = [_count_result(0), _rows_result([])]

        await self.service.find_all_published(mock_db_session)

        rows_query = mock_db_session.execute.await_args_list[1].args[0]
        assert "published" in str(rows_query.whereclause)

    @pytest.mark.asyncio
    async def test_bad_page_rejected_before_query(self, mock_db_session):
        with pytest.raises(ValidationError, match="Page number must be 0 or a positive integer"):
            await self.service.find_all(mock_db_session, page="-1")
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_bad_size_rejected_before_query(self, mock_db_session):
        with pytest.raises(ValidationError, match="Size must be a positive integer"):
            await self.service.find_all_published(mock_db_session, size="0")
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_offset_past_bigint_rejected_before_query(self, mock_db_session):
        with pytest.raises(DatabaseError) as exc_info:
            await self.service.find_all(mock_db_session, page="99999999999999999999")

        assert exc_info.value.message == "Some error occurred while retrieving tutorials."
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_database_failure_reports_driver_message(self, mock_db_session):
        mock_db_session.execute.side_effect = _operational_error()

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.find_all(mock_db_session)

        assert exc_info.value.message == "database is locked"
        assert exc_info.value.context["error_type"] == "OperationalError"


class TestTutorialServiceCreate:

    def setup_method(self):
        self.service = TutorialService()

    @pytest.mark.asyncio
    async def test_create_returns_location(self, mock_db_session):
        def assign_id():
            added = mock_db_session.add.call_args.args[0]
            added.id = 12

        mock_db_session.flush.side_effect = assign_id

        result = await self.service.create(
            mock_db_session, TutorialCreate(title="Flask basics", description="intro")
        )

        assert result.message == "New tutorial created."
        assert result.location == "/tutorials/12"
        added = mock_db_session.add.call_args.args[0]
        assert added.title == "Flask basics"
        assert added.published is False

    @pytest.mark.asyncio
    async def test_create_database_failure(self, mock_db_session):
        mock_db_session.flush.side_effect = _operational_error()

        with pytest.raises(DatabaseError, match="database is locked"):
            await self.service.create(mock_db_session, TutorialCreate(title="x"))


class TestTutorialServiceFindOne:

    def setup_method(self):
        self.service = TutorialService()

    @pytest.mark.asyncio
    async def test_found(self, mock_db_session, sample_tutorial_data):
        mock_db_session.get.return_value = _tutorial(sample_tutorial_data)

        result = await self.service.find_one(mock_db_session, "7")

        assert result.id == 7
        assert result.title == sample_tutorial_data["title"]
        assert result.published is True

    @pytest.mark.asyncio
    async def test_not_found_names_the_id(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.find_one(mock_db_session, "99")

        assert exc_info.value.message == "Not found Tutorial with id 99."

    @pytest.mark.asyncio
    async def test_non_numeric_id_not_found_without_query(self, mock_db_session):
        with pytest.raises(NotFoundError, match="Not found Tutorial with id abc."):
            await self.service.find_one(mock_db_session, "abc")
        mock_db_session.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_database_failure(self, mock_db_session):
        mock_db_session.get.side_effect = _operational_error()

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.find_one(mock_db_session, "3")

        assert exc_info.value.message == "Error retrieving Tutorial with id 3."


class TestTutorialServiceUpdate:

    def setup_method(self):
        self.service = TutorialService()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [None, TutorialUpdate(), TutorialUpdate(title=""), TutorialUpdate(description="only")],
    )
    async def test_missing_title_rejected(self, mock_db_session, payload):
        with pytest.raises(ValidationError, match="Request body can not be empty!"):
            await self.service.update(mock_db_session, "1", payload)
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_one_row_updated(self, mock_db_session):
        mock_db_session.execute.return_value = _rowcount_result(1)

        result = await self.service.update(
            mock_db_session, "5", TutorialUpdate(title="New", published=True)
        )

        assert result.message == "Tutorial with id=5 was updated successfully."
        statement = mock_db_session.execute.await_args.args[0]
        params = statement.compile().params
        assert params["title"] == "New"
        assert params["published"] is True
        assert "description" not in params

    @pytest.mark.asyncio
    async def test_explicit_null_description_is_written(self, mock_db_session):
        mock_db_session.execute.return_value = _rowcount_result(1)

        await self.service.update(
            mock_db_session, "5", TutorialUpdate(title="t", description=None, published=None)
        )

        params = mock_db_session.execute.await_args.args[0].compile().params
        assert "description" in params and params["description"] is None
        assert "published" not in params

    @pytest.mark.asyncio
    async def test_zero_rows_is_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _rowcount_result(0)

        with pytest.raises(NotFoundError, match="Not found Tutorial with id=5."):
            await self.service.update(mock_db_session, "5", TutorialUpdate(title="t"))

    @pytest.mark.asyncio
    async def test_database_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = _operational_error()

        with pytest.raises(DatabaseError, match="Error updating Tutorial with id=5."):
            await self.service.update(mock_db_session, "5", TutorialUpdate(title="t"))


class TestTutorialServiceDelete:

    def setup_method(self):
        self.service = TutorialService()

    @pytest.mark.asyncio
    async def test_one_row_deleted(self, mock_db_session):
        mock_db_session.execute.return_value = _rowcount_result(1)

        result = await self.service.delete(mock_db_session, "8")

        assert result.message == "Tutorial with id 8 was successfully deleted!"

    @pytest.mark.asyncio
    async def test_zero_rows_is_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _rowcount_result(0)

        with pytest.raises(NotFoundError, match="Not found Tutorial with id=8."):
            await self.service.delete(mock_db_session, "8")

    @pytest.mark.asyncio
    async def test_non_numeric_id_not_found_without_query(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await self.service.delete(mock_db_session, "published")
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_database_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = _operational_error()

        with pytest.raises(DatabaseError, match="Error deleting Tutorial with id=8."):
            await self.service.delete(mock_db_session, "8")

"""
Behavioral contract shared by both DecisionRepository implementations.

Every test runs against the in-memory map and against the SQLAlchemy
repository on an in-memory SQLite database (aiosqlite).
"""
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from infrastructure.db.database import create_tables
from infrastructure.db.repositories.decision_repo_sqlalchemy import DecisionRepoSqlalchemy
from infrastructure.memory import InMemoryDecisionRepository


@pytest_asyncio.fixture(params=["memory", "sql"])
async def repo(request):
    """Fresh, isolated repository for each test and backend."""
    if request.param == "memory":
        yield InMemoryDecisionRepository()
        return

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(engine)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield DecisionRepoSqlalchemy(session)
    await engine.dispose()


class TestUpsert:

    @pytest.mark.asyncio
    async def test_first_write_creates_decision(self, repo):
        decision = await repo.upsert("alice", "bob", True, 100)

        assert decision.actor_id == "alice"
        assert decision.recipient_id == "bob"
        assert decision.liked is True
        assert decision.timestamp == 100

        stored = await repo.get_decision("alice", "bob")
        assert stored == decision

    @pytest.mark.asyncio
    async def test_second_write_replaces_in_place(self, repo):
        await repo.upsert("alice", "bob", True, 100)
        await repo.upsert("alice", "bob", False, 200)

        stored = await repo.get_decision("alice", "bob")
        assert stored.liked is False
        assert stored.timestamp == 200
        assert len(await repo.list_decisions("alice", limit=10, offset=0)) == 1

    @pytest.mark.asyncio
    async def test_same_write_twice_is_idempotent(self, repo):
        await repo.upsert("alice", "bob", True, 100)
        once = await repo.get_decision("alice", "bob")
        await repo.upsert("alice", "bob", True, 100)
        twice = await repo.get_decision("alice", "bob")

        assert once == twice
        assert await repo.count_likers("bob") == 1

    @pytest.mark.asyncio
    async def test_pair_is_ordered(self, repo):
        await repo.upsert("alice", "bob", True, 100)

        assert await repo.get_decision("bob", "alice") is None

    @pytest.mark.asyncio
    async def test_self_decision_is_stored(self, repo):
        await repo.upsert("alice", "alice", True, 100)

        assert (await repo.get_decision("alice", "alice")).liked is True
        assert await repo.exists_reciprocal("alice", "alice") is True


class TestExistsReciprocal:

    @pytest.mark.asyncio
    async def test_false_when_no_reverse_decision(self, repo):
        await repo.upsert("alice", "bob", True, 100)

        assert await repo.exists_reciprocal("alice", "bob") is False

    @pytest.mark.asyncio
    async def test_true_when_reverse_liked(self, repo):
        await repo.upsert("bob", "alice", True, 100)

        assert await repo.exists_reciprocal("alice", "bob") is True

    @pytest.mark.asyncio
    async def test_false_when_reverse_passed(self, repo):
        await repo.upsert("bob", "alice", False, 100)

        assert await repo.exists_reciprocal("alice", "bob") is False


class TestListLikers:

    @pytest.mark.asyncio
    async def test_most_recent_first_and_passes_skipped(self, repo):
        await repo.upsert("a1", "r", True, 100)
        await repo.upsert("a2", "r", False, 200)
        await repo.upsert("a3", "r", True, 300)
        await repo.upsert("a4", "other", True, 400)

        likers = await repo.list_likers("r", exclude_reciprocated=False, limit=20, offset=0)

        assert [l.actor_id for l in likers] == ["a3", "a1"]
        assert [l.unix_timestamp for l in likers] == [300, 100]

    @pytest.mark.asyncio
    async def test_equal_timestamps_fall_back_to_insertion_order(self, repo):
        await repo.upsert("first", "r", True, 100)
        await repo.upsert("second", "r", True, 100)
        # rewriting keeps the original insertion position
        await repo.upsert("first", "r", True, 100)

        likers = await repo.list_likers("r", exclude_reciprocated=False, limit=20, offset=0)
        assert [l.actor_id for l in likers] == ["second", "first"]

        await repo.upsert("first", "r", True, 101)
        likers = await repo.list_likers("r", exclude_reciprocated=False, limit=20, offset=0)
        assert [l.actor_id for l in likers] == ["first", "second"]

    @pytest.mark.asyncio
    async def test_limit_and_offset(self, repo):
        for i in range(5):
            await repo.upsert(f"a{i}", "r", True, 100 + i)

        page = await repo.list_likers("r", exclude_reciprocated=False, limit=2, offset=1)
        assert [l.actor_id for l in page] == ["a3", "a2"]

        past_end = await repo.list_likers("r", exclude_reciprocated=False, limit=2, offset=10)
        assert past_end == []

    @pytest.mark.asyncio
    async def test_exclude_reciprocated(self, repo):
        await repo.upsert("matched", "r", True, 100)
        await repo.upsert("r", "matched", True, 101)
        await repo.upsert("waiting", "r", True, 102)
        await repo.upsert("passed_back", "r", True, 103)
        await repo.upsert("r", "passed_back", False, 104)

        all_likers = await repo.list_likers("r", exclude_reciprocated=False, limit=20, offset=0)
        new_likers = await repo.list_likers("r", exclude_reciprocated=True, limit=20, offset=0)

        assert {l.actor_id for l in all_likers} == {"matched", "waiting", "passed_back"}
        assert [l.actor_id for l in new_likers] == ["passed_back", "waiting"]


class TestCountAndDelete:

    @pytest.mark.asyncio
    async def test_count_only_likes_for_recipient(self, repo):
        await repo.upsert("a1", "r", True, 100)
        await repo.upsert("a2", "r", False, 100)
        await repo.upsert("a3", "r", True, 100)
        await repo.upsert("a1", "other", True, 100)

        assert await repo.count_likers("r") == 2
        assert await repo.count_likers("nobody") == 0

    @pytest.mark.asyncio
    async def test_delete_reports_whether_row_existed(self, repo):
        await repo.upsert("alice", "bob", True, 100)

        assert await repo.delete("alice", "bob") is True
        assert await repo.get_decision("alice", "bob") is None
        assert await repo.delete("alice", "bob") is False
        assert await repo.count_likers("bob") == 0


class TestListDecisions:

    @pytest.mark.asyncio
    async def test_decisions_made_by_actor(self, repo):
        await repo.upsert("alice", "bob", True, 100)
        await repo.upsert("alice", "carol", False, 200)
        await repo.upsert("dave", "alice", True, 300)

        decisions = await repo.list_decisions("alice", limit=10, offset=0)

        assert [(d.recipient_id, d.liked) for d in decisions] == [("carol", False), ("bob", True)]
        assert [d.recipient_id for d in await repo.list_decisions("alice", limit=1, offset=1)] == ["bob"]

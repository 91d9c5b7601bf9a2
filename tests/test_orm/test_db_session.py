"""数据库会话管理测试"""

import pytest
from sqlalchemy import func, select

from ygrid.config import DatabaseSettings
from ygrid.orm import Base, db_session_scope, get_db, get_engine, init_database

from tests.helpers import SortSlide


def _count(session):
    return session.scalar(select(func.count()).select_from(SortSlide))


@pytest.fixture
def database():
    engine, session_scope = init_database("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


class TestInitDatabase:

    def test_requires_url(self):
        with pytest.raises(ValueError):
            init_database(config=DatabaseSettings(url=""))

    def test_init_from_config(self):
        engine, session_scope = init_database(config=DatabaseSettings(url="sqlite:///:memory:"))

        assert get_engine() is engine
        assert session_scope is not None
        engine.dispose()

    def test_models_read_through_session(self, database):
        """初始化不给模型挂查询属性，读取统一经由 session"""
        assert not hasattr(SortSlide, "query")


class TestSessionScope:

    def test_commit(self, database):
        with db_session_scope() as session:
            session.add(SortSlide(title="S1", sort=1))

        with db_session_scope() as session:
            assert _count(session) == 1

    def test_rollback_on_error(self, database):
        with pytest.raises(RuntimeError):
            with db_session_scope() as session:
                session.add(SortSlide(title="S1", sort=1))
                session.flush()
                raise RuntimeError("写入失败")

        with db_session_scope() as session:
            assert _count(session) == 0

    def test_without_auto_commit(self, database):
        with db_session_scope(auto_commit=False) as session:
            session.add(SortSlide(title="S1", sort=1))
            session.flush()

        with db_session_scope() as session:
            assert _count(session) == 0


class TestGetDb:

    def test_commits_after_request(self, database):
        dependency = get_db()
        session = next(dependency)
        session.add(SortSlide(title="S1", sort=1))

        with pytest.raises(StopIteration):
            next(dependency)

        with db_session_scope() as session:
            assert _count(session) == 1

"""
Pytest 公共配置和 Fixtures

提供测试所需的公共资源：
- 内存数据库与会话
- 全局表格配置隔离
- 挂载表格路由的测试应用
"""

import os
import tempfile
from typing import Callable, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import ygrid.config.settings as settings_module
from ygrid.api import create_grid_router
from ygrid.exceptions import register_exception_handlers
from ygrid.grid import GridRequestContext
from ygrid.orm import Base

# 注册测试模型到 Base.metadata
import tests.helpers.models  # noqa: F401


# ==================== 基础 Fixtures ====================

@pytest.fixture(scope="session")
def temp_dir():
    """创建临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def temp_file(temp_dir):
    """创建临时文件的工厂函数"""
    created_files = []

    def _create_file(filename: str, content: str = "") -> str:
        filepath = os.path.join(temp_dir, filename)
        if os.path.dirname(filepath):
            os.makedirs(os.path.dirname(filepath), exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(content)
        created_files.append(filepath)
        return filepath

    yield _create_file

    for f in created_files:
        if os.path.exists(f):
            os.remove(f)


@pytest.fixture(autouse=True)
def reset_grid_settings(monkeypatch):
    """每个测试使用全新的表格默认配置"""
    monkeypatch.setattr(settings_module, "_grid_settings", None)
    yield


# ==================== 数据库 Fixtures ====================

@pytest.fixture(scope="function")
def memory_engine():
    """创建内存数据库引擎

    使用 StaticPool 和 check_same_thread=False，TestClient 的工作线程
    与测试共用同一个连接。
    """
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(memory_engine) -> Generator[Session, None, None]:
    """创建数据库会话"""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=memory_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def context(db_session) -> GridRequestContext:
    """默认请求上下文（第一页，未按表头排序）"""
    return GridRequestContext(session=db_session)


# ==================== FastAPI Fixtures ====================

@pytest.fixture
def make_client(db_session) -> Callable[..., TestClient]:
    """挂载表格路由并返回测试客户端的工厂函数"""

    def _make_client(grid, get_user=None) -> TestClient:
        app = FastAPI(title="Grid Test App")
        register_exception_handlers(app)
        app.include_router(create_grid_router(grid, get_session=lambda: db_session, get_user=get_user))
        return TestClient(app, raise_server_exceptions=False)

    return _make_client

"""
数据库会话管理模块

公开 API:
- db_manager: 数据库管理器单例
- init_database(): 初始化数据库连接
- get_engine(): 获取数据库引擎
- get_db(): FastAPI 依赖注入用的生成器
- db_session_scope(): 非 HTTP 场景的上下文管理器
- on_request_end(): 请求结束清理
"""

from typing import Any, Callable, Generator
from uuid import uuid4
from contextlib import contextmanager
from contextvars import ContextVar
import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, scoped_session, Session
from sqlalchemy.pool import StaticPool

from ygrid.log import get_logger

_logger = get_logger("ygrid.orm.session")


__all__ = [
    'db_manager',
    'DatabaseManager',
    'init_database',
    'get_engine',
    'get_db',
    'db_session_scope',
    'on_request_end',
]


class DatabaseManager:
    """数据库管理器（单例）

    使用示例:
        from ygrid.orm import db_manager

        db_manager.init(database_url="sqlite:///./cms.db")
        engine = db_manager.engine
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self._engine = None
        self._session_scope = None
        self._session_maker = None
        self._request_id_var: ContextVar[str] = ContextVar('request_id', default='')
        self._initialized = True

    # ==================== 属性访问 ====================

    @property
    def engine(self):
        """获取数据库引擎（只读）

        Raises:
            RuntimeError: 数据库未初始化时
        """
        if self._engine is None:
            raise RuntimeError("数据库未初始化，请先调用 init_database()")
        return self._engine

    @property
    def session_scope(self):
        if self._session_scope is None:
            raise RuntimeError("数据库未初始化，请先调用 init_database()")
        return self._session_scope

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None and self._session_scope is not None

    # ==================== 核心方法 ====================

    def init(
        self,
        database_url: str = None,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True,
        logger: logging.Logger = None,
        scopefunc: Callable = None,
        config: Any = None,
    ):
        """初始化数据库连接

        Args:
            database_url: 数据库连接URL（如果提供 config 则忽略）
            echo: 是否输出SQL语句
            pool_size: 连接池大小
            max_overflow: 最大溢出连接数
            pool_timeout: 连接超时时间
            pool_recycle: 连接回收时间
            pool_pre_ping: 连接前是否ping
            logger: 日志记录器
            scopefunc: session作用域函数，默认按请求ID隔离
            config: 数据库配置对象（DatabaseSettings）

        Returns:
            tuple: (engine, session_scope)

        使用示例:
            engine, session = init_database(config=settings.database)

            @app.get("/pages")
            def list_pages(db: Session = Depends(get_db)):
                ...
        """
        if config is not None:
            database_url = getattr(config, "url", database_url)
            echo = getattr(config, "echo", echo)
            pool_size = getattr(config, "pool_size", pool_size)
            max_overflow = getattr(config, "max_overflow", max_overflow)
            pool_timeout = getattr(config, "pool_timeout", pool_timeout)
            pool_recycle = getattr(config, "pool_recycle", pool_recycle)
            pool_pre_ping = getattr(config, "pool_pre_ping", pool_pre_ping)

        if not database_url:
            raise ValueError("database_url 是必需的，请通过参数或 config 提供")

        if logger is None:
            logger = _logger

        logger.info(f"数据库配置URL: {database_url}")

        if database_url.startswith("sqlite:///"):
            db_path = database_url[len("sqlite:///"):]
            is_memory_db = db_path == ":memory:" or db_path == ""

            if is_memory_db:
                # 内存数据库：单连接，多线程共享
                self._engine = create_engine(
                    database_url,
                    echo=echo,
                    connect_args={"check_same_thread": False},
                    poolclass=StaticPool,
                )
                logger.info("SQLite内存数据库引擎创建成功（StaticPool）")
            else:
                logger.info(f"SQLite文件数据库路径: {os.path.abspath(db_path)}")
                self._engine = create_engine(
                    database_url,
                    echo=echo,
                    connect_args={"check_same_thread": False, "timeout": pool_timeout},
                    pool_pre_ping=pool_pre_ping,
                )
        else:
            self._engine = create_engine(
                database_url,
                echo=echo,
                pool_pre_ping=pool_pre_ping,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                pool_recycle=pool_recycle
            )
            logger.info("数据库引擎创建成功")

        self._session_maker = sessionmaker(autocommit=False, autoflush=True, bind=self._engine)

        if scopefunc is None:
            scopefunc = self._get_request_id
        self._session_scope = scoped_session(self._session_maker, scopefunc=scopefunc)

        return self._engine, self._session_scope

    def get_session(self) -> Session:
        """获取 scoped session（低级 API，请优先使用 get_db / db_session_scope）"""
        if self._session_scope is None:
            raise RuntimeError("数据库未初始化，请先调用 init_database()")
        return self._session_scope()

    def cleanup(self):
        """请求结束时清理 session（幂等）"""
        request_id = self._get_request_id()
        if self._session_scope and self._session_scope.registry.has():
            self._session_scope.remove()
            _logger.debug(f"[request_id={request_id}] session_scope 移除完成")
        self._request_id_var.set('')

    # ==================== 请求ID管理（内部使用） ====================

    def _set_request_id(self, request_id: str = None) -> str:
        if not request_id:
            request_id = uuid4().hex[:8]
        self._request_id_var.set(request_id)
        return request_id

    def _get_request_id(self) -> str:
        value = self._request_id_var.get()
        if not value:
            value = uuid4().hex[:8]
            self._request_id_var.set(value)
        return value


# ==================== 全局单例 ====================

db_manager = DatabaseManager()


# ==================== 公开 API 函数 ====================

def init_database(
    database_url: str = None,
    echo: bool = False,
    config: Any = None,
    **kwargs
):
    """初始化数据库连接

    这是 db_manager.init() 的便捷包装函数。

    Returns:
        tuple: (engine, session_scope)
    """
    return db_manager.init(database_url=database_url, echo=echo, config=config, **kwargs)


def get_engine():
    """获取数据库引擎"""
    return db_manager.engine


def on_request_end():
    """请求结束时清理 session"""
    db_manager.cleanup()


def get_db() -> Generator[Session, None, None]:
    """FastAPI 依赖：每个请求一个 session

    正常结束时提交，出现异常时回滚，最后清理 session。

    使用示例:
        @router.post("/reorder")
        def reorder(db: Session = Depends(get_db)):
            ...
    """
    db_manager._set_request_id()
    session = db_manager.get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        on_request_end()


@contextmanager
def db_session_scope(request_id: str = None, auto_commit: bool = True):
    """数据库 session 上下文管理器（脚本、后台任务使用）

    使用示例:
        with db_session_scope() as session:
            grid_list = DataList(session, Slide).sort("sort")
    """
    db_manager._set_request_id(request_id)
    session = db_manager.get_session()
    try:
        yield session
        if auto_commit:
            session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        on_request_end()

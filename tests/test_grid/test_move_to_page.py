"""跨页移动 movetopage 测试

6 条记录，每页 2 条：
    第 1 页: S1 S2 | 第 2 页: S3 S4 | 第 3 页: S5 S6
"""

import pytest

from ygrid.exceptions import (
    AuthorizationException,
    BadRequestException,
    ErrorCode,
    ResourceNotFoundException,
)
from ygrid.grid import GridFieldOrderableRows, GridRequest, deny_all
from ygrid.orm import DataList

from tests.helpers import SortSlide, create_slides, make_slide_grid


def _move(grid, context, move):
    component = grid.config.get_component_by_type(GridFieldOrderableRows)
    return component.handle_move_to_page(grid, context, GridRequest(post_vars={"move": move}))


def _titles(session):
    return DataList(session, SortSlide).sort("sort").column("title")


@pytest.fixture
def slides(db_session):
    return create_slides(db_session, [1, 2, 3, 4, 5, 6])


@pytest.fixture
def page_two(context):
    return context.with_state(current_page=2)


class TestMoveToPage:

    def test_move_to_previous_page(self, db_session, slides, page_two):
        """S3 成为第 1 页最后一条，S2 顺延为第 2 页第一条"""
        _move(make_slide_grid(items_per_page=2), page_two, {"id": slides[2].id, "page": "prev"})

        assert _titles(db_session) == ["S1", "S3", "S2", "S4", "S5", "S6"]

    def test_move_to_next_page(self, db_session, slides, page_two):
        """S4 成为第 3 页第一条，S5 提前为第 2 页最后一条"""
        _move(make_slide_grid(items_per_page=2), page_two, {"id": slides[3].id, "page": "next"})

        assert _titles(db_session) == ["S1", "S2", "S3", "S5", "S4", "S6"]

    def test_sort_values_reused(self, db_session, slides, page_two):
        _move(make_slide_grid(items_per_page=2), page_two, {"id": slides[2].id, "page": "prev"})

        values = DataList(db_session, SortSlide).column("sort")
        assert sorted(values) == [1, 2, 3, 4, 5, 6]

    def test_returns_refreshed_page(self, db_session, slides, page_two):
        """返回的第 2 页以原上一页最后一条开头"""
        html = _move(make_slide_grid(items_per_page=2), page_two, {"id": slides[2].id, "page": "prev"})

        assert f'data-id="{slides[1].id}"' in html
        assert f'data-id="{slides[3].id}"' in html
        assert f'data-id="{slides[2].id}"' not in html

    def test_populates_before_moving(self, db_session, page_two):
        create_slides(db_session, [0, 0, 0, 0])

        _move(make_slide_grid(items_per_page=2), page_two, {"id": 4, "page": "prev"})

        assert _titles(db_session) == ["S1", "S4", "S2", "S3"]

    def test_populate_shifts_record_off_page(self, db_session, context):
        """补全把 0 值记录移到末尾后，被移动的记录不在刷新后的本页上"""
        slides = create_slides(db_session, [0, 0, 0, 0, 1, 2, 3, 4])
        grid = make_slide_grid(items_per_page=4)

        _move(grid, context.with_state(current_page=2), {"id": slides[5].id, "page": "prev"})

        titles = _titles(db_session)
        assert titles == ["S5", "S6", "S7", "S8", "S1", "S2", "S3", "S4"]
        assert "S6" in titles[:4]
        assert sorted(DataList(db_session, SortSlide).column("sort")) == [1, 2, 3, 4, 5, 6, 7, 8]

    def test_move_to_previous_page_of_five(self, db_session, context):
        """每页 5 条：第 2 页的 S8 与第 1 页最后一条 S5 交换，并排在 S5 之前"""
        create_slides(db_session, list(range(1, 13)))
        grid = make_slide_grid(items_per_page=5)

        _move(grid, context.with_state(current_page=2), {"id": 8, "page": "prev"})

        titles = _titles(db_session)
        assert titles == ["S1", "S2", "S3", "S4", "S8", "S5", "S6", "S7", "S9", "S10", "S11", "S12"]
        assert titles.index("S8") < titles.index("S5")

    def test_previous_from_first_page(self, slides, context):
        with pytest.raises(BadRequestException) as exc_info:
            _move(make_slide_grid(items_per_page=2), context, {"id": slides[0].id, "page": "prev"})
        assert exc_info.value.code == ErrorCode.INVALID_MOVE_TARGET

    def test_next_from_last_page(self, slides, context):
        last_page = context.with_state(current_page=3)
        with pytest.raises(BadRequestException) as exc_info:
            _move(make_slide_grid(items_per_page=2), last_page, {"id": slides[5].id, "page": "next"})
        assert exc_info.value.code == ErrorCode.INVALID_MOVE_TARGET

    def test_invalid_target(self, slides, page_two):
        with pytest.raises(BadRequestException) as exc_info:
            _move(make_slide_grid(items_per_page=2), page_two, {"id": slides[2].id, "page": "up"})
        assert exc_info.value.code == ErrorCode.INVALID_MOVE_TARGET

    def test_record_not_on_current_page(self, db_session, slides, page_two):
        with pytest.raises(BadRequestException) as exc_info:
            _move(make_slide_grid(items_per_page=2), page_two, {"id": slides[0].id, "page": "next"})

        assert exc_info.value.code == ErrorCode.INVALID_PAYLOAD
        assert _titles(db_session) == ["S1", "S2", "S3", "S4", "S5", "S6"]

    def test_move_must_be_object(self, slides, page_two):
        with pytest.raises(BadRequestException) as exc_info:
            _move(make_slide_grid(items_per_page=2), page_two, [slides[2].id, "prev"])
        assert exc_info.value.code == ErrorCode.INVALID_PAYLOAD

    def test_requires_paginator(self, slides, page_two):
        grid = make_slide_grid(paginated=False)
        with pytest.raises(ResourceNotFoundException) as exc_info:
            _move(grid, page_two, {"id": slides[2].id, "page": "prev"})
        assert exc_info.value.code == ErrorCode.COMPONENT_NOT_FOUND

    def test_permission_denied(self, db_session, slides, page_two):
        grid = make_slide_grid(items_per_page=2, permission_checker=deny_all)
        with pytest.raises(AuthorizationException):
            _move(grid, page_two, {"id": slides[2].id, "page": "prev"})
        assert _titles(db_session) == ["S1", "S2", "S3", "S4", "S5", "S6"]

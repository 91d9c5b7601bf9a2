"""更多操作菜单 GridFieldMeatballMenuComponent 测试"""

import html
import json
import re

import pytest

from ygrid.config import configure_grid
from ygrid.grid import GridFieldMeatballMenuComponent, GridRequest, MenuAction
from ygrid.exceptions import BadRequestException

from tests.helpers import SortDog, SortPage, SortSlide, make_dog_grid, make_page_grid, make_slide_grid


def _menu_dicts(component, grid, record):
    return {
        name: [action.to_dict() for action in actions]
        for name, actions in component.build_actions(grid, record).items()
    }


@pytest.fixture
def page(db_session):
    page = SortPage(title="Home")
    db_session.add(page)
    db_session.flush()
    return page


class TestBuildActions:
    """菜单构造"""

    def test_unpublished_page(self, page):
        grid = make_page_grid()
        component = GridFieldMeatballMenuComponent()

        assert _menu_dicts(component, grid, page) == {
            "rootlinks": [
                {"title": "Main", "link": f"/admin/pages/item/{page.id}/edit", "type": "link"},
                {"title": "Settings", "link": f"/admin/pages/item/{page.id}/edit?tab=Root_Settings", "type": "link"},
            ],
            "versioned": [
                {"title": "Publish", "link": f"/admin/pages/item/{page.id}/publish", "type": "versioning"},
                {"title": "Delete", "link": f"/admin/pages/item/{page.id}/archive", "type": "versioning"},
            ],
        }

    def test_published_page(self, db_session, page):
        page.publish()
        db_session.flush()

        actions = GridFieldMeatballMenuComponent().build_actions(make_page_grid(), page)

        assert [a.title for a in actions["versioned"]] == ["Unpublish", "Delete"]

    def test_modified_published_page(self, db_session, page):
        """已发布且草稿有修改时同时提供发布与下线"""
        page.publish()
        db_session.flush()
        page.title = "Home v2"
        db_session.flush()

        actions = GridFieldMeatballMenuComponent().build_actions(make_page_grid(), page)

        assert [a.title for a in actions["versioned"]] == ["Publish", "Unpublish", "Delete"]

    def test_hide_first_tab(self, page):
        component = GridFieldMeatballMenuComponent(show_first_tab=False)

        actions = component.build_actions(make_page_grid(), page)

        assert [a.title for a in actions["rootlinks"]] == ["Settings"]

    def test_show_first_tab_from_settings(self, page):
        configure_grid(show_first_tab=False)
        component = GridFieldMeatballMenuComponent()

        assert component.get_show_first_tab() is False
        assert component.set_show_first_tab(True).get_show_first_tab() is True

    def test_record_without_versioning(self, db_session):
        slide = SortSlide(title="S1")
        db_session.add(slide)
        db_session.flush()

        actions = GridFieldMeatballMenuComponent().build_actions(make_slide_grid(), slide)

        assert list(actions) == ["rootlinks"]
        assert actions["rootlinks"] == [MenuAction("Main", f"/admin/slides/item/{slide.id}/edit", "link")]

    def test_record_without_fields_or_versioning(self, db_session):
        dog = SortDog(name="Rex")
        db_session.add(dog)
        db_session.flush()

        component = GridFieldMeatballMenuComponent()
        actions = component.build_actions(make_dog_grid(), dog)

        assert actions == {}
        assert component.actions_to_json(actions) == "[]"

    def test_fresh_structure_per_record(self, db_session, page):
        """每条记录得到独立的菜单结构"""
        other = SortPage(title="About")
        db_session.add(other)
        db_session.flush()
        component = GridFieldMeatballMenuComponent()
        grid = make_page_grid()

        first = component.build_actions(grid, page)
        second = component.build_actions(grid, other)

        assert first is not second
        assert first["versioned"][0].link.endswith(f"/item/{page.id}/publish")
        assert second["versioned"][0].link.endswith(f"/item/{other.id}/publish")

    def test_labels(self, page):
        component = GridFieldMeatballMenuComponent(labels={"Publish": "发布"})
        configure_grid(menu_labels={"Delete": "删除"})

        actions = component.build_actions(make_page_grid(), page)

        assert [a.title for a in actions["versioned"]] == ["发布", "删除"]

    def test_actions_json_preserves_group_order(self, page):
        component = GridFieldMeatballMenuComponent()
        data = json.loads(component.actions_to_json(component.build_actions(make_page_grid(), page)))

        assert len(data) == 2
        assert data[0][0]["type"] == "link"
        assert data[1][0] == {
            "title": "Publish",
            "link": f"/admin/pages/item/{page.id}/publish",
            "type": "versioning",
        }


class TestColumn:
    """列渲染"""

    def test_column_appended_last(self, context):
        grid = make_page_grid()
        assert grid.get_columns(context) == ["Reorder", "title", "Meatballs"]

    def test_column_metadata_and_attributes(self, page, context):
        component = GridFieldMeatballMenuComponent()
        grid = make_page_grid()

        assert component.get_columns_handled(grid) == ["Meatballs"]
        assert component.get_column_metadata(grid, "Meatballs") == {"title": "More Actions"}
        assert component.get_column_metadata(grid, "title") == {}
        assert component.get_column_attributes(grid, context, page, "Meatballs") == {
            "class": "grid-field__col-compact meatball-menu"
        }

    def test_column_content_carries_actions(self, page, context):
        component = GridFieldMeatballMenuComponent()
        content = component.get_column_content(make_page_grid(), context, page, "Meatballs")

        match = re.search(r'data-actions="([^"]*)"', str(content))
        data = json.loads(html.unescape(match.group(1)))
        assert [action["title"] for action in data[1]] == ["Publish", "Delete"]


class TestRecordLink:
    """item/{id} 编辑视图"""

    def _link(self, grid, context, record_id, tab=None):
        component = grid.config.get_component_by_type(GridFieldMeatballMenuComponent)
        query = {"tab": tab} if tab else {}
        return component.handle_record_link(grid, context, GridRequest(params={"id": str(record_id)}, query=query))

    def test_existing_record_first_tab(self, page, context):
        result = self._link(make_page_grid(), context, page.id)

        assert result["id"] == page.id
        assert result["is_new"] is False
        assert result["tab"] == "Root_Main"
        assert result["record"] is page
        assert result["fields"][0]["name"] == "Root"

    def test_tab_qualifier(self, page, context):
        result = self._link(make_page_grid(), context, page.id, tab="Root_Settings")
        assert result["tab"] == "Root_Settings"

    def test_unknown_tab_falls_back_to_first(self, page, context):
        result = self._link(make_page_grid(), context, page.id, tab="Root_Missing")
        assert result["tab"] == "Root_Main"

    def test_unknown_record_returns_blank(self, context):
        result = self._link(make_page_grid(), context, 999)

        assert result["id"] is None
        assert result["is_new"] is True
        assert isinstance(result["record"], SortPage)

    def test_invalid_id(self, context):
        with pytest.raises(BadRequestException):
            self._link(make_page_grid(), context, "abc")

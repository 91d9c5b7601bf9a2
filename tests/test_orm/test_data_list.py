"""数据列表 DataList / ManyManyList 测试

测试内容：
1. 排序、分页、按主键过滤都返回新列表
2. map / column 直接读取数据库中的列值
3. 多对多列表限定在所属记录内，额外字段解析到关联表
"""

import pytest

from ygrid.orm import DataList, ManyManyList

from tests.helpers import (
    SortImage,
    SortSlide,
    create_gallery,
    create_slides,
    gallery_images,
)


class TestDataList:
    """单模型列表测试"""

    def test_sort_returns_new_list(self, db_session):
        """排序不修改原列表"""
        create_slides(db_session, [3, 1, 2])
        data_list = DataList(db_session, SortSlide)

        sorted_list = data_list.sort("sort")

        assert not data_list.is_sorted
        assert sorted_list.is_sorted
        assert [s.title for s in sorted_list] == ["S2", "S3", "S1"]

    def test_sort_desc(self, db_session):
        create_slides(db_session, [3, 1, 2])
        titles = [s.title for s in DataList(db_session, SortSlide).sort("sort", direction="desc")]
        assert titles == ["S1", "S3", "S2"]

    def test_sort_ties_broken_by_id(self, db_session):
        """排序值相同时按主键排序"""
        create_slides(db_session, [5, 5, 1])
        titles = [s.title for s in DataList(db_session, SortSlide).sort("sort")]
        assert titles == ["S3", "S1", "S2"]

    def test_limit_and_offset(self, db_session):
        create_slides(db_session, [1, 2, 3, 4, 5])
        page = DataList(db_session, SortSlide).sort("sort").limit(2, 2)

        assert page.limit_value == 2
        assert page.offset_value == 2
        assert [s.title for s in page] == ["S3", "S4"]

    def test_count_respects_limit(self, db_session):
        create_slides(db_session, [1, 2, 3, 4, 5])
        data_list = DataList(db_session, SortSlide)

        assert data_list.count() == 5
        assert len(data_list.limit(2)) == 2
        assert data_list.limit(10, 4).count() == 1

    def test_by_ids(self, db_session):
        slides = create_slides(db_session, [1, 2, 3])
        data_list = DataList(db_session, SortSlide).by_ids([slides[0].id, slides[2].id])
        assert data_list.column("title") == ["S1", "S3"]

    def test_by_id_and_first(self, db_session):
        slides = create_slides(db_session, [2, 1])
        data_list = DataList(db_session, SortSlide)

        assert data_list.by_id(slides[1].id).title == "S2"
        assert data_list.by_id(999) is None
        assert data_list.sort("sort").first().title == "S2"

    def test_map_follows_sort(self, db_session):
        slides = create_slides(db_session, [20, 10])
        values = DataList(db_session, SortSlide).sort("sort").map("id", "sort")

        assert list(values.items()) == [(slides[1].id, 10), (slides[0].id, 20)]

    def test_exists(self, db_session):
        data_list = DataList(db_session, SortSlide)
        assert data_list.exists() is False
        create_slides(db_session, [1])
        assert data_list.exists() is True

    def test_unknown_field_raises_value_error(self, db_session):
        with pytest.raises(ValueError):
            DataList(db_session, SortSlide).sort("missing")

    def test_non_column_attribute_raises_value_error(self, db_session):
        """方法、查询属性等不是字段"""
        with pytest.raises(ValueError):
            DataList(db_session, SortSlide).sort("to_dict")


class TestManyManyList:
    """多对多列表测试"""

    @pytest.fixture
    def images(self, db_session):
        images = [SortImage(title=f"I{index}") for index in range(1, 4)]
        db_session.add_all(images)
        db_session.flush()
        return images

    def test_for_relationship(self, db_session, images):
        """从 relationship(secondary=...) 推断关联表与额外字段"""
        gallery = create_gallery(db_session, "G", {images[0]: 1})

        data_list = ManyManyList.for_relationship(db_session, gallery, "images")

        assert data_list.join_table is gallery_images
        assert data_list.local_key == "image_id"
        assert data_list.foreign_key == "gallery_id"
        assert data_list.foreign_id == gallery.id
        assert data_list.extra_fields == ("sort",)
        assert data_list.data_class is SortImage

    def test_for_relationship_unknown_name(self, db_session, images):
        with pytest.raises(KeyError):
            ManyManyList.for_relationship(db_session, images[0], "images")

    def test_list_scoped_to_owner(self, db_session, images):
        first = create_gallery(db_session, "G1", {images[0]: 1, images[1]: 2})
        second = create_gallery(db_session, "G2", {images[2]: 1})

        assert sorted(ManyManyList.for_relationship(db_session, first, "images").column("title")) == ["I1", "I2"]
        assert ManyManyList.for_relationship(db_session, second, "images").column("title") == ["I3"]

    def test_sort_by_extra_field(self, db_session, images):
        """额外字段 sort 解析到关联表"""
        gallery = create_gallery(db_session, "G", {images[0]: 3, images[1]: 1, images[2]: 2})
        data_list = ManyManyList.for_relationship(db_session, gallery, "images")

        assert data_list.field_expression("sort") is gallery_images.c.sort
        assert [i.title for i in data_list.sort("sort")] == ["I2", "I3", "I1"]
        assert data_list.sort("sort").map("id", "sort") == {
            images[1].id: 1,
            images[2].id: 2,
            images[0].id: 3,
        }

    def test_same_record_in_two_owners(self, db_session, images):
        """同一图片在不同相册中的排序值互不影响"""
        first = create_gallery(db_session, "G1", {images[0]: 5})
        second = create_gallery(db_session, "G2", {images[0]: 9})

        assert ManyManyList.for_relationship(db_session, first, "images").map("id", "sort") == {images[0].id: 5}
        assert ManyManyList.for_relationship(db_session, second, "images").map("id", "sort") == {images[0].id: 9}

    def test_count(self, db_session, images):
        gallery = create_gallery(db_session, "G", {images[0]: 1, images[2]: 2})
        data_list = ManyManyList.for_relationship(db_session, gallery, "images")
        assert data_list.count() == 2
        assert data_list.by_ids([images[2].id]).count() == 1

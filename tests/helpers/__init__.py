"""测试辅助工具"""

from .models import (
    SortSlide,
    SortAnimal,
    SortDog,
    SortImage,
    SortGallery,
    SortPage,
    gallery_images,
)
from .grids import (
    make_slide_grid,
    make_dog_grid,
    make_gallery_grid,
    make_page_grid,
    create_slides,
    create_gallery,
    sort_values,
)

__all__ = [
    "SortSlide",
    "SortAnimal",
    "SortDog",
    "SortImage",
    "SortGallery",
    "SortPage",
    "gallery_images",
    "make_slide_grid",
    "make_dog_grid",
    "make_gallery_grid",
    "make_page_grid",
    "create_slides",
    "create_gallery",
    "sort_values",
]

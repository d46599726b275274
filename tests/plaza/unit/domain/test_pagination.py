"""Unit tests for paging primitives."""

import pytest

from plaza.domain.shared.pagination import MAX_PAGE_SIZE, Page, PageRequest


class TestPageRequest:
    def test_offset(self):
        assert PageRequest(page=2, size=10).offset == 20

    @pytest.mark.parametrize(
        ("page", "size", "expected"),
        [
            (-1, 10, (0, 10)),
            (0, 0, (0, 1)),
            (0, 500, (0, MAX_PAGE_SIZE)),
        ],
    )
    def test_values_are_clamped(self, page, size, expected):
        request = PageRequest(page=page, size=size)

        assert (request.page, request.size) == expected


class TestPage:
    def test_pages(self):
        assert Page(items=[], total=0, request=PageRequest(size=10)).pages == 1
        assert Page(items=[], total=10, request=PageRequest(size=10)).pages == 1
        assert Page(items=[], total=11, request=PageRequest(size=10)).pages == 2

    def test_map_keeps_totals(self):
        page = Page(items=[1, 2], total=5, request=PageRequest(size=2))

        mapped = page.map(str)

        assert mapped.items == ["1", "2"]
        assert mapped.total == 5
        assert mapped.request == page.request

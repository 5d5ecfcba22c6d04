"""
Core — Pagination

Page-number paginator shared by every list endpoint (units, lots,
transfer records). Clients may shrink or grow pages up to MAX_PAGE_SIZE.

The paginated body carries its own ``meta`` block, which
StandardJSONRenderer lifts into the response envelope unchanged.

@file core/pagination.py
"""

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


class StandardPagination(PageNumberPagination):
    page_size = DEFAULT_PAGE_SIZE
    page_size_query_param = 'page_size'
    max_page_size = MAX_PAGE_SIZE

    def get_paginated_response(self, data):
        return Response({
            'results': data,
            'meta': {
                'count': self.page.paginator.count,
                'page': self.page.number,
                'page_size': self.get_page_size(self.request),
                'total_pages': self.page.paginator.num_pages,
                'next': self.get_next_link(),
                'previous': self.get_previous_link(),
            },
        })

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'properties': {
                'results': schema,
                'meta': {
                    'type': 'object',
                    'properties': {
                        'count': {'type': 'integer'},
                        'page': {'type': 'integer'},
                        'page_size': {'type': 'integer'},
                        'total_pages': {'type': 'integer'},
                        'next': {'type': 'string', 'nullable': True, 'format': 'uri'},
                        'previous': {'type': 'string', 'nullable': True, 'format': 'uri'},
                    },
                },
            },
        }

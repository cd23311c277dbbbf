from rest_framework.pagination import PageNumberPagination


class StandardPagination(PageNumberPagination):
    """
    Page-number pagination shared by every list endpoint.

    ?page=N selects the page, ?page_size=N (capped at max_page_size)
    overrides the default size.
    """

    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200

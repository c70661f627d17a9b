from rest_framework.pagination import PageNumberPagination


class StandardResultsSetPagination(PageNumberPagination):
    """
    Opt-in paging: lists come back as plain arrays unless the client sends
    `page_size`, which is what the board frontend expects.
    """

    page_size = None
    page_size_query_param = "page_size"
    max_page_size = 1000

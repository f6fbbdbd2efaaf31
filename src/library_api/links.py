import json
from enum import Enum

from starlette.datastructures import URL

from library_api.pagination import AuthorsResourceParameters, PagedList

PAGINATION_HEADER = "X-Pagination"


class ResourceUriType(Enum):
    PREVIOUS_PAGE = -1
    CURRENT = 0
    NEXT_PAGE = 1


def create_authors_resource_uri(
    base_url: URL | str, parameters: AuthorsResourceParameters, uri_type: ResourceUriType
) -> str:
    """Link to a page of the author collection relative to ``parameters``.

    Does not check that the target page exists.
    """
    query: dict[str, str | int] = {}
    if parameters.search_query is not None:
        query["searchQuery"] = parameters.search_query
    if parameters.genre is not None:
        query["genre"] = parameters.genre
    query["pageNumber"] = parameters.page_number + uri_type.value
    query["pageSize"] = parameters.page_size

    return str(URL(str(base_url)).replace_query_params(**query))


def pagination_header(
    base_url: URL | str, parameters: AuthorsResourceParameters, page: PagedList
) -> str:
    previous_page_link = (
        create_authors_resource_uri(base_url, parameters, ResourceUriType.PREVIOUS_PAGE)
        if page.has_previous
        else None
    )
    next_page_link = (
        create_authors_resource_uri(base_url, parameters, ResourceUriType.NEXT_PAGE)
        if page.has_next
        else None
    )
    return json.dumps(
        {
            "totalCount": page.total_count,
            "pageSize": page.page_size,
            "currentPage": page.current_page,
            "totalPages": page.total_pages,
            "previousPageLink": previous_page_link,
            "nextPageLink": next_page_link,
        }
    )

"""
Book Search - terminal client for a full-text book search service.
Landing and results pages driven by a navigable location, with draft and
applied filters kept in sync with it.
"""

from .language_utils import *
from .models import *
from .filters import *
from .navigation import *
from .network_utils import *
from .lifecycle import *
from .controller import *

__all__ = [
    # Language reference data
    'Language',
    'LANGUAGE_TABLE',
    'build_language_list',
    'get_languages',
    'find_language',
    'get_language_name',
    'year_options',

    # Data model
    'SearchQuery',
    'FilterSet',
    'EMPTY_FILTERS',
    'BookResult',
    'ResultPayload',
    'SearchFailure',
    'MalformedResponseError',

    # Filters
    'FilterDraftStore',
    'coerce_year',

    # Navigation
    'Location',
    'NavigationHistory',
    'encode',
    'decode',
    'encode_query_string',
    'canonical_location',
    'location_query',

    # Search service
    'SearchClient',
    'build_search_url',

    # Result lifecycle and session
    'ResultStatus',
    'ResultLifecycle',
    'SearchController',
]

# config.py

import os
from dotenv import load_dotenv

load_dotenv()

# --- API Configuration ---
API_HOST = os.getenv('API_HOST', '0.0.0.0')
API_PORT = int(os.getenv('API_PORT', '8000'))
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

# --- Pagination ---
DEFAULT_LIMIT = 20
MAX_LIMIT = 20

# --- Sorting ---
# Values accepted by the 'sortBy' query parameter
DEFAULT_SORT_BY = 'allTimeVolume'

# --- Filters ---
# At least one of these must be present in a request.
# A non-default 'sortBy' is NOT treated as selective.
SELECTIVE_FILTERS = ('collections_set_id', 'community', 'contract', 'name')

# --- Projection ---
SAMPLE_IMAGES_LIMIT = 4

# Amounts are stored in wei (10^-18 ETH)
CURRENCY_DECIMALS = 18

# --- Database Tables ---
COLLECTIONS_TABLE = 'collections'
TOKENS_TABLE = 'tokens'
TOKEN_SETS_TABLE = 'token_sets'
COLLECTIONS_SETS_TABLE = 'collections_sets_collections'

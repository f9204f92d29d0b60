from app.services.clients.base import BaseServiceClient
from app.services.clients.business_client import BusinessClient
from app.services.clients.user_client import UserClient
from app.services.clients.taxonomy_client import TaxonomyClient
from app.services.clients.search_index_client import SearchIndexClient

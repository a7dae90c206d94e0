from sacco_client.client import SaccoApiClient
from sacco_client.exceptions import ApiError

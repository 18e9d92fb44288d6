"""Entity definitions for the four CRM record types."""
from .base import EntityDefinition
from .seed_data import seed_clients, seed_contracts, seed_properties, seed_transactions

CLIENTS = EntityDefinition(
    name="client",
    resource="clients",
    datetime_fields=("createdAt", "updatedAt", "lastContacted"),
    seed=seed_clients,
)

PROPERTIES = EntityDefinition(
    name="property",
    resource="properties",
    seed=seed_properties,
)

# The ledger is ordered by transaction date rather than creation time.
TRANSACTIONS = EntityDefinition(
    name="transaction",
    resource="transactions",
    order_field="date",
    datetime_fields=("createdAt", "updatedAt", "date"),
    seed=seed_transactions,
)

CONTRACTS = EntityDefinition(
    name="contract",
    resource="contracts",
    datetime_fields=("createdAt", "updatedAt", "expiryDate", "signingDate"),
    seed=seed_contracts,
)

ALL_ENTITIES = (CLIENTS, PROPERTIES, TRANSACTIONS, CONTRACTS)

"""API V1 Router"""

from fastapi import APIRouter

from splitter.api.v1.endpoints import bills, items, people, splits, contacts, currencies

api_router = APIRouter()

api_router.include_router(bills.router, prefix="/bills", tags=["Bills"])
api_router.include_router(items.router, prefix="/bills/{bill_id}/items", tags=["Items"])
api_router.include_router(splits.router, prefix="/bills/{bill_id}", tags=["Splits"])
api_router.include_router(people.router, prefix="/bills/{bill_id}/people", tags=["People"])
api_router.include_router(contacts.router, prefix="/contacts", tags=["Contacts"])
api_router.include_router(currencies.router, prefix="/currencies", tags=["Currencies"])

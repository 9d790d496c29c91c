from fastapi import APIRouter

from contact_directory.api.v1.endpoints import contacts

api_v1_router = APIRouter()

api_v1_router.include_router(contacts.router, prefix="/contacts", tags=["contacts"])

from fastapi import Request
from app.services.job_manager import Stores


# Stores are built once in the app lifespan and kept on app.state
def get_stores(request: Request) -> Stores:
    return request.app.state.stores

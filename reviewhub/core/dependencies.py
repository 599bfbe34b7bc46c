"""
Service dependencies for route handlers
Reference: https://fastapi.tiangolo.com/tutorial/dependencies/
"""
from functools import lru_cache

from reviewhub.services.assembler import GraphAssembler
from reviewhub.services.auth import get_password_hasher
from reviewhub.services.directory import BusinessDirectory
from reviewhub.services.mutations import MutationService
from reviewhub.services.storage import get_photo_storage


@lru_cache()
def get_directory() -> BusinessDirectory:
    """
    Get a singleton BusinessDirectory wired to the configured photo storage
    and password hasher.

    Route handlers receive it through Depends(get_directory); tests swap it
    out with app.dependency_overrides.

    Reference: https://docs.python.org/3/library/functools.html#functools.lru_cache
    """
    mutations = MutationService(get_photo_storage(), get_password_hasher())
    return BusinessDirectory(GraphAssembler(), mutations)

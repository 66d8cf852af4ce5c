"""
Favorite Service - избранные мероприятия пользователя (множество event_id)
"""
from typing import List

from teatro.errors import NotFoundError
from teatro.schemas import FavoriteEvent
from teatro.stores import TheaterStore


def list_favorites(store: TheaterStore, user_id: str) -> List[FavoriteEvent]:
    return store.list_favorites(user_id)


def add_favorite(store: TheaterStore, user_id: str, event_id: str) -> FavoriteEvent:
    if store.get_event(event_id) is None:
        raise NotFoundError("Evento não encontrado")
    for favorite in store.list_favorites(user_id):
        if favorite.event_id == event_id:
            return favorite
    return store.add_favorite(user_id, event_id)


def remove_favorite(store: TheaterStore, user_id: str, event_id: str) -> None:
    store.remove_favorite(user_id, event_id)

from teatro.schemas.base import CamelModel


class FavoriteEvent(CamelModel):
    event_id: str
    added_date: str


class FavoriteCreateRequest(CamelModel):
    event_id: str

"""
Схема зала для выбора мест

Схема зала является визуальной заглушкой: строится на лету из счётчиков мероприятия,
нигде не сохраняется и не сверяется с бронированиями.
"""
import math
import random
import string
from typing import List, Optional

from teatro.schemas import Event, Seat, SeatMap, SeatStatus

OCCUPIED_PROBABILITY = 0.3


def row_label(row: int) -> str:
    return string.ascii_uppercase[row]


def seat_label(row: int, number: int) -> str:
    return f"{row_label(row)}{number}"


def generate_seat_map(
    event: Event, rows: int = 10, rng: Optional[random.Random] = None
) -> SeatMap:
    """Ряды A.., по ceil(total/rows) мест в ряду, не больше total_seats мест.

    Не более (total - available) мест помечаются занятыми, каждое с
    вероятностью OCCUPIED_PROBABILITY.
    """
    rng = rng or random.Random()
    rows = max(1, min(rows, len(string.ascii_uppercase)))
    total = max(event.total_seats, 0)
    seats_per_row = math.ceil(total / rows) if total else 0
    occupied_limit = max(total - event.available_seats, 0)

    seat_map: List[List[Seat]] = []
    placed = 0
    occupied = 0
    for row in range(rows):
        row_seats: List[Seat] = []
        for number in range(1, seats_per_row + 1):
            if placed >= total:
                break
            is_occupied = occupied < occupied_limit and rng.random() < OCCUPIED_PROBABILITY
            if is_occupied:
                occupied += 1
            row_seats.append(
                Seat(
                    id=seat_label(row, number),
                    row=row,
                    number=number,
                    status=SeatStatus.OCCUPIED if is_occupied else SeatStatus.AVAILABLE,
                    price=event.price,
                )
            )
            placed += 1
        if row_seats:
            seat_map.append(row_seats)

    return SeatMap(
        event_id=event.id,
        available_seats=event.available_seats,
        total_seats=event.total_seats,
        rows=seat_map,
    )


def total_price(seat_count: int, unit_price: float) -> float:
    return round(seat_count * unit_price, 2)

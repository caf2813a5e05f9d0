"""
Sample authors and books for populating the in-memory store.

Ids are fixed so that book ``author_id`` references resolve.
"""

from __future__ import annotations

from copy import deepcopy

from .base import Record

SEED_AUTHORS: list[Record] = [
    {"id": "1", "name": "George Orwell", "nationality": "British"},
    {"id": "2", "name": "Gabriel García Márquez", "nationality": "Colombian"},
    {"id": "3", "name": "J. R. R. Tolkien", "nationality": "British"},
    {"id": "4", "name": "Mary Shelley", "nationality": "British"},
]

SEED_BOOKS: list[Record] = [
    {
        "id": "1",
        "title": "1984",
        "description": "A totalitarian state watches everyone, always.",
        "isbn": "978-0451524935",
        "publisher": "Secker & Warburg",
        "gender": "DYSTOPIAN",
        "year": 1949,
        "author_id": "1",
    },
    {
        "id": "2",
        "title": "Animal Farm",
        "description": None,
        "isbn": "978-0451526342",
        "publisher": "Secker & Warburg",
        "gender": "SATIRE",
        "year": 1945,
        "author_id": "1",
    },
    {
        "id": "3",
        "title": "Cien años de soledad",
        "description": "Seven generations of the Buendía family in Macondo.",
        "isbn": "978-0307474728",
        "publisher": "Editorial Sudamericana",
        "gender": "FICTION",
        "year": 1967,
        "author_id": "2",
    },
    {
        "id": "4",
        "title": "The Hobbit",
        "description": None,
        "isbn": "978-0547928227",
        "publisher": "George Allen & Unwin",
        "gender": "FANTASY",
        "year": 1937,
        "author_id": "3",
    },
    {
        "id": "5",
        "title": "Frankenstein",
        "description": "A scientist creates life and abandons it.",
        "isbn": "978-0486282114",
        "publisher": "Lackington, Hughes, Harding, Mavor & Jones",
        "gender": "HORROR",
        "year": 1818,
        "author_id": "4",
    },
]


def seed_records() -> tuple[list[Record], list[Record]]:
    """Return fresh copies of the sample (books, authors)."""
    return deepcopy(SEED_BOOKS), deepcopy(SEED_AUTHORS)

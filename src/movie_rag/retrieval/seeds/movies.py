"""
Movie seed data.

This module contains a small built-in corpus for demos and tests.
In production the corpus comes from a movies.json file produced by the
loading and vectorization jobs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from movie_rag.retrieval.corpus import InMemoryCorpus
from movie_rag.retrieval.document import Document, Review
from movie_rag.retrieval.vectorize import vectorize_documents

if TYPE_CHECKING:
    from movie_rag.core import Embedder


def get_movie_documents() -> list[Document]:
    """Get the seed movies (without vectors)."""
    return [
        Document(
            id="1",
            title="Star Wars",
            description=(
                "A farm boy joins a smuggler, a princess and an old Jedi knight "
                "to rescue the galaxy from the Empire and its planet-destroying "
                "battle station."
            ),
            genre="Sci-Fi",
            year=1977,
            actors=["Mark Hamill", "Harrison Ford", "Carrie Fisher"],
            reviews=[
                Review("Alice", 5, "A timeless space adventure with unforgettable heroes."),
                Review("Bob", 4, "Great fun, the effects still hold up."),
            ],
        ),
        Document(
            id="2",
            title="The Matrix",
            description=(
                "A hacker learns that the world he knows is a simulation run by "
                "machines and joins a rebellion to free humanity."
            ),
            genre="Sci-Fi",
            year=1999,
            actors=["Keanu Reeves", "Laurence Fishburne", "Carrie-Anne Moss"],
            reviews=[
                Review("Carol", 5, "Mind-bending action that changed the genre."),
            ],
        ),
        Document(
            id="3",
            title="Inception",
            description=(
                "A thief who steals secrets through dream-sharing technology is "
                "given the inverse task of planting an idea in a target's mind."
            ),
            genre="Sci-Fi",
            year=2010,
            actors=["Leonardo DiCaprio", "Joseph Gordon-Levitt", "Elliot Page"],
            reviews=[
                Review("Dave", 5, "Layered, clever and visually stunning."),
                Review("Eve", 4, "Needs a second viewing, in a good way."),
            ],
        ),
        Document(
            id="4",
            title="Interstellar",
            description=(
                "With Earth becoming uninhabitable, a team of explorers travels "
                "through a wormhole in search of a new home for humanity."
            ),
            genre="Sci-Fi",
            year=2014,
            actors=["Matthew McConaughey", "Anne Hathaway", "Jessica Chastain"],
            reviews=[
                Review("Frank", 5, "Epic space exploration with real emotional weight."),
            ],
        ),
        Document(
            id="5",
            title="The Godfather",
            description=(
                "The aging patriarch of a crime dynasty transfers control of his "
                "empire to his reluctant youngest son."
            ),
            genre="Crime",
            year=1972,
            actors=["Marlon Brando", "Al Pacino", "James Caan"],
            reviews=[
                Review("Grace", 5, "A masterpiece of family, power and loyalty."),
            ],
        ),
        Document(
            id="6",
            title="Toy Story",
            description=(
                "A cowboy doll feels threatened when a new spaceman action figure "
                "becomes the favourite toy in a boy's room."
            ),
            genre="Animation",
            year=1995,
            actors=["Tom Hanks", "Tim Allen"],
            reviews=[
                Review("Heidi", 5, "Funny and heartfelt for all ages."),
            ],
        ),
        Document(
            id="7",
            title="The Shawshank Redemption",
            description=(
                "Two imprisoned men bond over a number of years, finding solace "
                "and eventual redemption through acts of common decency."
            ),
            genre="Drama",
            year=1994,
            actors=["Tim Robbins", "Morgan Freeman"],
            reviews=[
                Review("Ivan", 5, "Hopeful, patient storytelling at its best."),
            ],
        ),
        Document(
            id="8",
            title="Jurassic Park",
            description=(
                "A theme park of cloned dinosaurs suffers a major power breakdown "
                "that allows its prehistoric residents to run loose."
            ),
            genre="Adventure",
            year=1993,
            actors=["Sam Neill", "Laura Dern", "Jeff Goldblum"],
            reviews=[
                Review("Judy", 4, "Thrilling adventure with groundbreaking effects."),
            ],
        ),
    ]


def seed_corpus(embeddings: Embedder) -> InMemoryCorpus:
    """
    Build an in-memory corpus of the seed movies with combined embeddings.

    Args:
        embeddings: Any Embedder implementation
    """
    docs = vectorize_documents(get_movie_documents(), embeddings)
    return InMemoryCorpus(docs)

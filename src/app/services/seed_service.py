# src/app/services/seed_service.py
"""
Operator-only bootstrap and seeding.
Only reachable through the admin CLI, never through the HTTP API.
"""
from __future__ import annotations

import logging

from src.app.domain.models import BackfillResult, NewRecommendation, Role, SeedResult
from src.app.infra.db.base import RecommendationRepository, UserRoleRepository

logger = logging.getLogger(__name__)

SEED_USER_ID = "seed_bot"
SEED_USERNAME = "HypeShelf_Bot"


def _seed(title: str, genre: str, link: str, blurb: str, is_staff_pick: bool = False) -> NewRecommendation:
    return NewRecommendation(
        title=title,
        genre=genre,
        link=link,
        blurb=blurb,
        user_id=SEED_USER_ID,
        username=SEED_USERNAME,
        is_staff_pick=is_staff_pick,
    )


SEED_MOVIES: tuple[NewRecommendation, ...] = (
    _seed(
        "Interstellar",
        "sci-fi",
        "https://www.imdb.com/title/tt0816692/",
        "A jaw-dropping journey through wormholes and time dilation. Nolan at his most "
        "ambitious, emotionally wrecking and visually stunning.",
        is_staff_pick=True,
    ),
    _seed(
        "Blade Runner 2049",
        "sci-fi",
        "https://www.imdb.com/title/tt1856101/",
        "Deakins' cinematography alone is worth the watch. A slow burn that rewards "
        "patience with one of the most beautiful films ever made.",
    ),
    _seed(
        "Dune: Part Two",
        "sci-fi",
        "https://www.imdb.com/title/tt15239678/",
        "Villeneuve delivers an epic on a scale rarely seen. The sandworm ride sequence "
        "alone makes it a must-watch.",
    ),
    _seed(
        "Parasite",
        "drama",
        "https://www.imdb.com/title/tt6751668/",
        "Bong Joon-ho's masterclass in genre-blending. You think you know where it's "
        "going. You don't.",
        is_staff_pick=True,
    ),
    _seed(
        "Get Out",
        "horror",
        "https://www.imdb.com/title/tt5052448/",
        "Jordan Peele's debut is one of the sharpest horror films in decades. "
        "Terrifying, funny, and devastatingly smart.",
    ),
    _seed(
        "Hereditary",
        "horror",
        "https://www.imdb.com/title/tt7784604/",
        "Ari Aster's debut is a slow, relentless descent into dread. The most genuinely "
        "disturbing horror film of the 2010s.",
    ),
    _seed(
        "Everything Everywhere All At Once",
        "action",
        "https://www.imdb.com/title/tt6710474/",
        "Chaotic, profound, and somehow deeply moving. Michelle Yeoh carries an "
        "everything-bagel-sized multiverse on her shoulders.",
        is_staff_pick=True,
    ),
    _seed(
        "Mad Max: Fury Road",
        "action",
        "https://www.imdb.com/title/tt1392190/",
        "Two hours of pure kinetic cinema. George Miller somehow made the greatest "
        "action movie ever at age 70.",
    ),
    _seed(
        "The Grand Budapest Hotel",
        "comedy",
        "https://www.imdb.com/title/tt2278388/",
        "Wes Anderson at peak Wes Anderson. A laugh-out-loud caper wrapped in a "
        "perfectly symmetrical pink box.",
    ),
    _seed(
        "Past Lives",
        "drama",
        "https://www.imdb.com/title/tt13238346/",
        "A quiet devastator. Celine Song's debut feature will leave you aching about "
        "the lives not lived.",
    ),
    _seed(
        "Free Solo",
        "documentary",
        "https://www.imdb.com/title/tt7775622/",
        "Alex Honnold free-soloing El Capitan. Watching it is physically stressful. One "
        "of the most extraordinary human achievements ever filmed.",
    ),
    _seed(
        "Oppenheimer",
        "drama",
        "https://www.imdb.com/title/tt15398776/",
        "Three hours that feel like ninety minutes. Cillian Murphy's best performance "
        "and Nolan's most mature film.",
    ),
)


class SeedService:
    def __init__(
        self,
        recommendations: RecommendationRepository,
        users: UserRoleRepository,
    ):
        self._recommendations = recommendations
        self._users = users

    def grant_admin(self, user_id: str) -> dict[str, bool]:
        self._users.upsert(user_id, Role.ADMIN)
        logger.info("Granted admin to %s", user_id)
        return {"success": True}

    def backfill_admin_staff_picks(self) -> BackfillResult:
        """
        Mark every recommendation authored by a current admin as a staff pick.
        Safe to re-run: rows already flagged are left untouched.
        """
        admin_ids = self._users.list_admin_ids()
        if not admin_ids:
            logger.info("No admins found.")
            return BackfillResult(updated=0)

        updated = 0
        for rec in self._recommendations.list_recent():
            if rec.user_id in admin_ids and not rec.is_staff_pick:
                self._recommendations.set_staff_pick(rec.id, True)
                updated += 1

        logger.info("Backfilled %d recommendations as Staff Pick.", updated)
        return BackfillResult(updated=updated)

    def seed_movies(self) -> SeedResult:
        if self._recommendations.exists_for_user(SEED_USER_ID):
            logger.info("Seed already ran. Skipping.")
            return SeedResult(skipped=True, count=0)

        stored = self._recommendations.insert_many(list(SEED_MOVIES))

        logger.info("Seeded %d movies.", len(stored))
        return SeedResult(skipped=False, count=len(stored))

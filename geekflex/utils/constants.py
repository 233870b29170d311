"""
Constantes globales pour GeekFlex.

Ce module contient les constantes utilisees dans l'application:
- URLs des images TMDB (posters, fonds)
- Mapping des IDs de genre TMDB (films et series) vers noms coreens
- Categories reconciliees periodiquement et leur planification
"""

from typing import NamedTuple

# Images TMDB : les chemins stockes en base sont relatifs (ex: "/abc.jpg")
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
TMDB_POSTER_SIZE = "w500"
TMDB_BACKDROP_SIZE = "w1280"

# Seule la premiere page de chaque liste est reconciliee
DEFAULT_LISTING_PAGE = 1

# Mapping des IDs de genre TMDB (films) vers noms coreens
# Les listes TMDB ne renvoient que les IDs, pas les noms
TMDB_GENRE_MAPPING = {
    28: "액션",
    12: "모험",
    16: "애니메이션",
    35: "코미디",
    80: "범죄",
    99: "다큐멘터리",
    18: "드라마",
    10751: "가족",
    14: "판타지",
    36: "역사",
    27: "공포",
    10402: "음악",
    9648: "미스터리",
    10749: "로맨스",
    878: "SF",
    10770: "TV 영화",
    53: "스릴러",
    10752: "전쟁",
    37: "서부",
}

# Mapping des IDs de genre TMDB (series TV) vers noms coreens
# Certains IDs sont propres aux series (10759, 10765, ...)
TMDB_TV_GENRE_MAPPING = {
    10759: "액션 & 어드벤처",
    16: "애니메이션",
    35: "코미디",
    80: "범죄",
    99: "다큐멘터리",
    18: "드라마",
    10751: "가족",
    10762: "키즈",
    9648: "미스터리",
    10763: "뉴스",
    10764: "리얼리티",
    10765: "SF & 판타지",
    10766: "연속극",
    10767: "토크",
    10768: "전쟁 & 정치",
    37: "서부",
}


class CategorySchedule(NamedTuple):
    """Categorie reconciliee periodiquement.

    Attributes:
        category: Nom de la categorie (valeur stockee dans les tags)
        listing_path: Endpoint TMDB de la liste classee
        crontab: Expression cron a 5 champs
    """

    category: str
    listing_path: str
    crontab: str


# Toutes les 3 heures, decalees d'une minute pour ne pas solliciter
# TMDB et la base au meme instant
CATEGORY_SCHEDULES = (
    CategorySchedule("NOW_PLAYING", "/movie/now_playing", "0 */3 * * *"),
    CategorySchedule("POPULAR", "/movie/popular", "1 */3 * * *"),
    CategorySchedule("UPCOMING", "/movie/upcoming", "2 */3 * * *"),
    CategorySchedule("TOP_RATED", "/movie/top_rated", "3 */3 * * *"),
)


def find_schedule(category: str) -> CategorySchedule:
    """Retourne la planification d'une categorie (insensible a la casse)."""
    wanted = category.strip().upper().replace("-", "_")
    for schedule in CATEGORY_SCHEDULES:
        if schedule.category == wanted:
            return schedule
    known = ", ".join(s.category for s in CATEGORY_SCHEDULES)
    raise KeyError(f"Categorie inconnue: {category!r} (connues: {known})")

from enum import Enum, IntEnum

class MovieGenre(IntEnum):
    """TMDB Movie Genres - https://developer.themoviedb.org/reference/genre-movie-list"""
    ACTION = 28
    ADVENTURE = 12
    ANIMATION = 16
    COMEDY = 35
    CRIME = 80
    DOCUMENTARY = 99
    DRAMA = 18
    FAMILY = 10751
    FANTASY = 14
    HISTORY = 36
    HORROR = 27
    MUSIC = 10402
    MYSTERY = 9648
    ROMANCE = 10749
    SCIENCE_FICTION = 878
    TV_MOVIE = 10770
    THRILLER = 53
    WAR = 10752
    WESTERN = 37

class ActiveTab(str, Enum):
    """Front-end tabs, keyed the way the tab bar keys them"""
    SEARCH = "1"
    RATED = "2"

class SessionStatus(str, Enum):
    """Guest session lifecycle"""
    UNINITIALIZED = "uninitialized"
    CREATING = "creating"
    READY = "ready"

class GenreHelper:
    """Static genre names, used when the genre list cannot be fetched"""

    # TMDB spells a few names differently from the enum member
    _DISPLAY_NAMES = {
        MovieGenre.SCIENCE_FICTION: "Science Fiction",
        MovieGenre.TV_MOVIE: "TV Movie",
    }

    @staticmethod
    def get_movie_genre_name(genre_id: int) -> str:
        """Return the display name for a movie genre id"""
        try:
            genre = MovieGenre(genre_id)
        except ValueError:
            return "Unknown"
        return GenreHelper._DISPLAY_NAMES.get(genre, genre.name.replace('_', ' ').title())

    @staticmethod
    def get_all_movie_genres() -> dict:
        """All movie genres as {id: name}"""
        return {genre.value: GenreHelper.get_movie_genre_name(genre.value) for genre in MovieGenre}

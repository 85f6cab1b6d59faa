import enum


class Difficulty(str, enum.Enum):
    """Niveau d'une question ou d'une ressource. Sert aussi de palier de compétence."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def rank(self) -> int:
        return DIFFICULTY_ORDER.index(self)

    @classmethod
    def parse(cls, value: "str | Difficulty") -> "Difficulty":
        """Accepte une valeur brute ('Beginner ', 'advanced'...) et lève ValueError sinon."""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


DIFFICULTY_ORDER = (Difficulty.BEGINNER, Difficulty.INTERMEDIATE, Difficulty.ADVANCED)


def format_topic_name(topic: str) -> str:
    """'python-data-structures' -> 'Python Data Structures'."""
    return " ".join(word[:1].upper() + word[1:] for word in topic.split("-"))


def normalize_topic(topic: str | None) -> str:
    return (topic or "").strip().lower()

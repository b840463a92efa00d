from types import MappingProxyType
from typing import Dict, Mapping

from loguru import logger

from nhl_stats.utils.misc_utils import normalize_alias


class UnknownTeamError(ValueError):
    """Raised by strict lookups when a name is not in the alias table."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Unknown NHL team: {text!r}")


# Canonical abbreviation -> aliases (city, nickname, full name, abbreviation).
# Keys of the built table are compact: lowercase, no whitespace.
_CLUBS: Dict[str, tuple] = {
    "ANA": ("anaheim", "ducks", "anaheim ducks"),
    "BOS": ("boston", "bruins", "boston bruins"),
    "BUF": ("buffalo", "sabres", "buffalo sabres"),
    "CAR": ("carolina", "hurricanes", "carolina hurricanes", "canes"),
    "CBJ": ("columbus", "blue jackets", "columbus blue jackets"),
    "CGY": ("calgary", "flames", "calgary flames"),
    "CHI": ("chicago", "blackhawks", "chicago blackhawks", "hawks"),
    "COL": ("colorado", "avalanche", "colorado avalanche", "avs"),
    "DAL": ("dallas", "stars", "dallas stars"),
    "DET": ("detroit", "red wings", "detroit red wings"),
    "EDM": ("edmonton", "oilers", "edmonton oilers"),
    "FLA": ("florida", "panthers", "florida panthers"),
    "LAK": ("los angeles", "kings", "los angeles kings", "la"),
    "MIN": ("minnesota", "wild", "minnesota wild"),
    "MTL": ("montreal", "canadiens", "montreal canadiens", "habs"),
    "NJD": ("new jersey", "devils", "new jersey devils"),
    "NSH": ("nashville", "predators", "nashville predators", "preds"),
    "NYI": ("islanders", "new york islanders"),
    # Bare "new york" goes to the Rangers
    "NYR": ("new york", "rangers", "new york rangers"),
    "OTT": ("ottawa", "senators", "ottawa senators", "sens"),
    "PHI": ("philadelphia", "flyers", "philadelphia flyers"),
    "PIT": ("pittsburgh", "penguins", "pittsburgh penguins", "pens"),
    "SEA": ("seattle", "kraken", "seattle kraken"),
    "SJS": ("san jose", "sharks", "san jose sharks"),
    "STL": ("st louis", "st. louis", "blues", "st louis blues", "st. louis blues"),
    "TBL": ("tampa", "tampa bay", "lightning", "tampa bay lightning", "bolts"),
    "TOR": ("toronto", "maple leafs", "toronto maple leafs", "leafs"),
    "UTA": ("utah", "mammoth", "utah mammoth", "utah hockey club"),
    "VAN": ("vancouver", "canucks", "vancouver canucks"),
    "VGK": ("vegas", "knights", "golden knights", "vegas golden knights"),
    "WPG": ("winnipeg", "jets", "winnipeg jets"),
    "WSH": ("washington", "capitals", "washington capitals", "caps"),
}


def _build_alias_table(clubs: Mapping[str, tuple]) -> Mapping[str, str]:
    table: Dict[str, str] = {}
    for abbrev, aliases in clubs.items():
        table[normalize_alias(abbrev)] = abbrev
        for alias in aliases:
            table[normalize_alias(alias)] = abbrev
    return MappingProxyType(table)


TEAM_ALIASES: Mapping[str, str] = _build_alias_table(_CLUBS)


class TeamResolver:
    """Maps free-text team names, cities and nicknames to NHL abbreviations."""

    def __init__(self, aliases: Mapping[str, str] = TEAM_ALIASES):
        self.aliases = aliases

    def is_known(self, text: str) -> bool:
        return normalize_alias(text) in self.aliases

    def resolve(self, text: str) -> str:
        """Returns the canonical abbreviation, or the uppercased compact input.

        The fallback is not validated against the NHL API: an unrecognized
        name becomes a guessed abbreviation that only fails downstream.
        """
        key = normalize_alias(text)
        abbrev = self.aliases.get(key)
        if abbrev is None:
            logger.debug(f"No alias for '{text}', falling back to '{key.upper()}'")
            return key.upper()
        return abbrev

    def resolve_strict(self, text: str) -> str:
        key = normalize_alias(text)
        try:
            return self.aliases[key]
        except KeyError:
            raise UnknownTeamError(text) from None


default_resolver = TeamResolver()

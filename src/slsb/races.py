"""Race key tables: legacy names, output folders and manifest aliases."""

from __future__ import annotations

from slsb.errors import UnknownRaceError, UnmappedRaceError

HUMAN = "Human"

# Legacy race names, normalised to lower case without whitespace.
LEGACY_RACE_KEYS: dict[str, str] = {
    "human": HUMAN,
    "humans": HUMAN,
    "ashhoppers": "Ash Hopper",
    "bears": "Bear",
    "boars": "Boar",
    "boarsany": "Boar (Any)",
    "boarsmounted": "Boar (Mounted)",
    "canines": "Canine",
    "chaurus": "Chaurus",
    "chaurushunters": "Chaurus Hunter",
    "chaurusreapers": "Chaurus Reaper",
    "chickens": "Chicken",
    "cows": "Cow",
    "deers": "Deer",
    "dogs": "Dog",
    "dragonpriests": "Dragon Priest",
    "dragons": "Dragon",
    "draugrs": "Draugr",
    "dwarvenballistas": "Dwarven Ballista",
    "dwarvencenturions": "Dwarven Centurion",
    "dwarvenspheres": "Dwarven Sphere",
    "dwarvenspiders": "Dwarven Spider",
    "falmers": "Falmer",
    "flameatronach": "Flame Atronach",
    "foxes": "Fox",
    "frostatronach": "Frost Atronach",
    "gargoyles": "Gargoyle",
    "giants": "Giant",
    "giantspiders": "Giant Spider",
    "goats": "Goat",
    "hagravens": "Hagraven",
    "horkers": "Horker",
    "horses": "Horse",
    "icewraiths": "Ice Wraith",
    "largespiders": "Large Spider",
    "lurkers": "Lurker",
    "mammoths": "Mammoth",
    "mudcrabs": "Mudcrab",
    "netches": "Netch",
    "rabbits": "Rabbit",
    "rieklings": "Riekling",
    "sabrecats": "Sabrecat",
    "seekers": "Seeker",
    "skeevers": "Skeever",
    "slaughterfishes": "Slaughterfish",
    "spiders": "Spider",
    "spriggans": "Spriggan",
    "stormatronach": "Storm Atronach",
    "trolls": "Troll",
    "vampirelords": "Vampire Lord",
    "werewolves": "Werewolf",
    "wispmothers": "Wispmother",
    "wisps": "Wisp",
    "wolves": "Wolf",
}

RACE_FOLDERS: dict[str, str] = {
    HUMAN: "character",
    "Ash Hopper": "dlc02/scrib",
    "Bear": "bear",
    "Boar": "dlc02/boarriekling",
    "Boar (Any)": "dlc02/boarriekling",
    "Boar (Mounted)": "dlc02/boarriekling",
    "Canine": "canine",
    "Dog": "canine",
    "Wolf": "canine",
    "Fox": "canine",
    "Chaurus": "chaurus",
    "Chaurus Reaper": "chaurus",
    "Chaurus Hunter": "dlc01/chaurusflyer",
    "Chicken": "ambient/chicken",
    "Cow": "cow",
    "Deer": "deer",
    "Dragon Priest": "dragonpriest",
    "Dragon": "dragon",
    "Draugr": "draugr",
    "Dwarven Ballista": "dlc02/dwarvenballistacenturion",
    "Dwarven Centurion": "dwarvensteamcenturion",
    "Dwarven Sphere": "dwarvenspherecenturion",
    "Dwarven Spider": "dwarvenspider",
    "Falmer": "falmer",
    "Flame Atronach": "atronachflame",
    "Frost Atronach": "atronachfrost",
    "Storm Atronach": "atronachstorm",
    "Gargoyle": "dlc01/vampirebrute",
    "Giant": "giant",
    "Goat": "goat",
    "Hagraven": "hagraven",
    "Horker": "horker",
    "Horse": "horse",
    "Ice Wraith": "icewraith",
    "Lurker": "dlc02/benthiclurker",
    "Mammoth": "mammoth",
    "Mudcrab": "mudcrab",
    "Netch": "dlc02/netch",
    "Rabbit": "ambient/hare",
    "Riekling": "dlc02/riekling",
    "Sabrecat": "sabrecat",
    "Seeker": "dlc02/hmdaedra",
    "Skeever": "skeever",
    "Slaughterfish": "slaughterfish",
    "Spider": "frostbitespider",
    "Large Spider": "frostbitespider",
    "Giant Spider": "frostbitespider",
    "Spriggan": "spriggan",
    "Troll": "troll",
    "Vampire Lord": "vampirelord",
    "Werewolf": "werewolfbeast",
    "Wispmother": "wisp",
    "Wisp": "witchlight",
}

# Races whose manifest lines also belong to (or only to) other buckets.
RACE_ALIASES: dict[str, tuple[str, ...]] = {
    "Canine": ("Canine", "Dog", "Wolf"),
    "Dog": ("Dog", "Canine"),
    "Wolf": ("Wolf", "Canine"),
    "Chaurus": ("Chaurus",),
    "Chaurus Reaper": ("Chaurus",),
    "Spider": ("Spider",),
    "Large Spider": ("Spider",),
    "Giant Spider": ("Spider",),
    "Boar": ("Boar (Any)",),
    "Boar (Mounted)": ("Boar (Any)",),
    "Boar (Any)": ("Boar (Any)",),
}


def lookup_legacy_race(name: str) -> str:
    """Map a legacy race name such as ``"Dogs"`` to its race key."""
    key = "".join(name.split()).lower()
    try:
        return LEGACY_RACE_KEYS[key]
    except KeyError:
        msg = f"Unrecognized legacy race: {name!r}"
        raise UnknownRaceError(msg) from None


def race_aliases(race: str) -> tuple[str, ...]:
    """Return the manifest buckets a race contributes to."""
    return RACE_ALIASES.get(race, (race,))


def race_folder(race: str) -> str:
    """Return the ``meshes/actors`` sub folder for a race key."""
    try:
        return RACE_FOLDERS[race]
    except KeyError:
        msg = f"Cannot find folder for race key {race!r}"
        raise UnmappedRaceError(msg) from None

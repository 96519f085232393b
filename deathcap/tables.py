"""Mutations, locations, and the shroomp/hazard/wild-shroomp tables."""

from deathcap.models import (
    HazardRow as H,
    Location,
    LocationKey,
    Mutation,
    Rules,
    ShroompRow as S,
    WildShroompRow,
)


# --- Mutations (one per team member, usable once per challenge round) ---

MUTATIONS: tuple[Mutation, ...] = (
    Mutation(key="knifeFingers", label="Knife Fingers",
             description="Re-roll all 5 dice."),
    Mutation(key="tongueSight", label="Tongue Sight",
             description="Roll a die. On 1-3, -2 to your dice. On 4-6, +2 to your dice. "
                         "Split as you wish."),
    Mutation(key="permanentChefHat", label="Permanent Chef Hat",
             description="Re-roll any single die."),
    Mutation(key="gastromancy", label="Gastromancy",
             description="You can use the Mutation of a dead person from any team."),
    Mutation(key="soupGlands", label="Soup Glands",
             description="Set your highest die to any number."),
    Mutation(key="buttMouth", label="Butt Mouth",
             description="-1 to any die and +1 to any die."),
    Mutation(key="cannibalConnoisseur", label="Cannibal Connoisseur",
             description="+1 to a die for each dead team member."),
    Mutation(key="curseOfTheMoonLadle", label="Curse of the Moon Ladle",
             description="+1 to the Hazard roll this round. This can stack if other "
                         "players also use this Mutation."),
)

# Hazard bonus granted per use of Curse of the Moon Ladle
MOON_LADLE_HAZARD_BONUS = 1


# --- Locations (challenges 1-5) ---

SALTY_DESERT = Location(
    key=LocationKey.SALTY_DESERT,
    label="Salty Desert",
    order=1,
    judge="Billy Wishbones",
    judge_description=(
        "An elder chef and sentient skeleton. Her bones have become encrusted in salt. "
        "Won the last Shroomp competition over 50 years ago."
    ),
    flavor_text=(
        "The pink and white salt dunes coruscate as the sun rises over the great desert. "
        "The ancient cooking stations are weathered by the sharp wind. Something rumbles "
        "deep beneath the ground."
    ),
    hazard_min=5,
    hazard_max=8,
    shroomp_table=(
        S(roll=1, requirement="All same number", dish_theme="Comfort Classics"),
        S(roll=2, requirement="All different numbers", dish_theme="Desert Delights"),
        S(roll=3, requirement="3 in a row", dish_theme="Sippin' and Dippin'"),
        S(roll=4, requirement="Pair of 6's", dish_theme="Salt and Sand"),
        S(roll=5, requirement="Total 12+", dish_theme="Bone Broth"),
        S(roll=6, requirement="No 1's", dish_theme="Skeleton's Feast"),
    ),
    hazard_table=(
        H(roll=1, name="Mirage of the Knife", value=5, penalty="Swap Presentation with Originality"),
        H(roll=2, name="Cactus Gnomes", value=6),
        H(roll=3, name="Salt Goblin", value=6, penalty="-1 to lowest Dish die"),
        H(roll=4, name="Pickling Pond", value=7),
        H(roll=5, name="Mirage of the Knife", value=7, penalty="Swap Presentation with Originality"),
        H(roll=6, name="Cactus Gnomes", value=8, penalty="-2 to any Dish die"),
    ),
)

KINGS_COURT = Location(
    key=LocationKey.KINGS_COURT,
    label="King's Court",
    order=2,
    judge="Scrangly, the Rat King",
    judge_description=(
        "An ancient, rusting animatronic construct that inexplicably gained artificial "
        "intelligence. Their taste in food varies with their mood."
    ),
    flavor_text=(
        "Heralded as a site of historic culinary significance in the Wastelands, the ruins "
        "of The King's Court are meticulously maintained by a dedicated few. Researchers "
        "believe it was once a common area where food was served in something called a 'mall.'"
    ),
    hazard_min=5,
    hazard_max=9,
    shroomp_table=(
        S(roll=1, requirement="Dish score 10+", dish_theme="Doomsday Pepper"),
        S(roll=2, requirement="No 2's or 5's", dish_theme="Stir Fried Sorcery"),
        S(roll=3, requirement="Pair in Dish dice", dish_theme="Royal Feast"),
        S(roll=4, requirement="All Dish dice odd", dish_theme="Court Cuisine"),
        S(roll=5, requirement="Presentation 5+", dish_theme="Animatronic Appetizers"),
        S(roll=6, requirement="All Dish dice even", dish_theme="Mall Food Revival"),
    ),
    hazard_table=(
        H(roll=1, name="Crumb Rats", value=5),
        H(roll=2, name="Acidic Critics", value=6, penalty="-1 to Flavor"),
        H(roll=3, name="Kitchen Cutlery Rain", value=7),
        H(roll=4, name="Acidic Critics", value=7, penalty="-2 to Flavor"),
        H(roll=5, name="The Tenderizer", value=8, penalty="-1 to all Dish dice"),
        H(roll=6, name="The Tenderizer", value=9, penalty="-2 to all Dish dice"),
    ),
)

ONION_SWAMP = Location(
    key=LocationKey.ONION_SWAMP,
    label="Onion Swamp",
    order=3,
    judge="The Shallot Witch",
    judge_description=(
        "A practitioner of gastromancy with a focused interest in food properties beyond "
        "look and taste. Her palette prefers dishes that would be considered 'absolute shit' "
        "by most."
    ),
    flavor_text=(
        "The acrid air hits the senses like a big, rotten dump truck. Ironwood docks host a "
        "thriving black market where the most forbidden ingredients are bartered away. One "
        "false step in the waters may pull you under, never to resurface."
    ),
    hazard_min=6,
    hazard_max=10,
    shroomp_table=(
        S(roll=1, requirement="Lowest die is 3+", dish_theme="Swamp Stew"),
        S(roll=2, requirement="Total Dish 11+", dish_theme="Forbidden Flavors"),
        S(roll=3, requirement="No matching dice", dish_theme="Witch's Brew"),
        S(roll=4, requirement="Originality 5+", dish_theme="Black Market Bites"),
        S(roll=5, requirement="3 of a kind in Dish", dish_theme="Onion Layers"),
        S(roll=6, requirement="Survive Hazard", dish_theme="Gastromancy Special"),
    ),
    hazard_table=(
        H(roll=1, name="Reeking Rapscallions", value=6),
        H(roll=2, name="The Searing Fumes", value=6, penalty="Lose 1 Mutation from Team"),
        H(roll=3, name="Onion Ogre", value=7),
        H(roll=4, name="The Bog of Beguiling", value=8,
          penalty="Re-roll each Dish die and put in same place"),
        H(roll=5, name="The Devil's Lettuce", value=9),
        H(roll=6, name="Fish of the Day", value=10, penalty="Score 0 in Category of your choice"),
    ),
)

MELTED_MOUNTAIN = Location(
    key=LocationKey.MELTED_MOUNTAIN,
    label="Melted Mountain",
    order=4,
    judge="Gooble Froot",
    judge_description=(
        "A massive, mutated slug with a bad boy attitude. His thick coat of fuzz is always "
        "cultivating a new flavor through fermentation. Rumored to swap recipes with the "
        "Shroomp Lord each full moon."
    ),
    flavor_text=(
        "The dense forests along the mountainside give off a dull green glow that can be "
        "seen from miles away at night. Unknown shrieks and growls pierce through the cold "
        "fog. Pockets of searing radiation turn to sub-zero temperatures at the summit."
    ),
    hazard_min=6,
    hazard_max=11,
    shroomp_table=(
        S(roll=1, requirement="Flavor 6", dish_theme="Fermented Fuzz"),
        S(roll=2, requirement="Total Hazard 10+", dish_theme="Mountain Melt"),
        S(roll=3, requirement="All dice 3+", dish_theme="Glowing Greens"),
        S(roll=4, requirement="Dish total 13+", dish_theme="Radiation Risotto"),
        S(roll=5, requirement="No 4's", dish_theme="Frosty Fusion"),
        S(roll=6, requirement="Straight (1-2-3-4-5 or 2-3-4-5-6)", dish_theme="Summit Surprise"),
    ),
    hazard_table=(
        H(roll=1, name="Pepper Ghosts", value=6),
        H(roll=2, name="The Brothman", value=7,
          penalty="Roll die. If 6, +3 next dish. Else, -3 next dish"),
        H(roll=3, name="Boiling Ooze", value=8),
        H(roll=4, name="The Forbidden Pit", value=9, penalty="Score 2 in all Categories for Dish"),
        H(roll=5, name="Parasitic Frost", value=10,
          penalty="Roll die, subtract value from Dish, split as you wish"),
        H(roll=6, name="The Breathless Fog", value=11, penalty="Next Challenge, can't use Mutations"),
    ),
)

# Final challenge. Hazard 1 wipes the team.
SHROOMP_LAIR = Location(
    key=LocationKey.SHROOMP_LAIR,
    label="Shroomp Lair",
    order=5,
    judge="The Shroomp Lord",
    judge_description=(
        "Nobody knows if they were a human taken over by mushrooms or a massive mushroom "
        "colony that developed intelligence. They are the only source of the most coveted "
        "ingredient across the Wasteland: Shroomps!"
    ),
    flavor_text=(
        "The location of the Shroomp Lair is a closely guarded secret and the journey to it "
        "is treacherous. Sounds in the cavernous space are dampened by the soft, fungal "
        "walls. The Shroomp Lord awaits upon their massive mycelium throne!"
    ),
    hazard_min=7,
    hazard_max=12,
    shroomp_table=(
        S(roll=1, requirement="Dish Score 14+, all Evens", dish_theme="Fungimentals"),
        S(roll=2, requirement="All Dish dice same", dish_theme="Mycelium Medley"),
        S(roll=3, requirement="3 in a row, Total Dish score Even", dish_theme="Chili Bones"),
        S(roll=4, requirement="Survive Hazard, +2 to Hazard Roll", dish_theme="Herbs and Vices"),
        S(roll=5, requirement="6 in Presentation and Originality", dish_theme="Doomed Legumes"),
        S(roll=6, requirement="Dish total 15+", dish_theme="Signature Dish"),
    ),
    hazard_table=(
        H(roll=1, name="The Gelatinous Oubliette", value=7,
          penalty="Your Team dies & don't present Dish"),
        H(roll=2, name="Mind Spores", value=8, penalty="Swap 2 Dish Dice with 2 Hazard Dice"),
        H(roll=3, name="The Ceaseless Void", value=9, penalty="Score 1 in all Categories for Dish"),
        H(roll=4, name="Shroomp Cultist", value=10, penalty="Lose a Shroomp"),
        H(roll=5, name="Cast Iron Maiden", value=11),
        H(roll=6, name="The Whispering Sentinel", value=12,
          penalty="Give a Shroomp to another player"),
    ),
)

LOCATIONS: tuple[Location, ...] = (
    SALTY_DESERT, KINGS_COURT, ONION_SWAMP, MELTED_MOUNTAIN, SHROOMP_LAIR,
)


# --- Wild Shroomp (end-game bonus, roll 1d6) ---

WILD_SHROOMP_TABLE: tuple[WildShroompRow, ...] = (
    WildShroompRow(roll=1, name="Consolation Shroomp", requirement="Most 1's among all your dishes"),
    WildShroompRow(roll=2, name="Lucky Shroomp", requirement="Most 6's among all your dishes"),
    WildShroompRow(roll=3, name="Sacrifice Shroomp", requirement="Most dead team members"),
    WildShroompRow(roll=4, name="Underdog Shroomp", requirement="Fewest total Shroomps so far"),
    WildShroompRow(roll=5, name="Masterpiece Shroomp", requirement="Highest single dish score"),
    WildShroompRow(roll=6, name="Survivor Shroomp", requirement="All team members alive"),
)


DEFAULT_RULES = Rules(
    mutations=MUTATIONS,
    locations=LOCATIONS,
    wild_shroomp_table=WILD_SHROOMP_TABLE,
)

# Starting crew used when a restaurant is created without explicit members
DEFAULT_TEAM: tuple[tuple[str, str], ...] = (
    ("Chef 1", "knifeFingers"),
    ("Chef 2", "tongueSight"),
    ("Chef 3", "permanentChefHat"),
)

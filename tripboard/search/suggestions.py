"""Turn geocoder features into autocomplete suggestions."""

from tripboard.models.search import PlaceFeature, PlaceProperties, PlaceSuggestion

UNKNOWN_LOCATION = "Unknown Location"

# Classification keys that always denote an area
PLACE_KEYS = frozenset({"place", "boundary"})

# Classification values that denote a settlement or region
PLACE_VALUES = frozenset(
    {"city", "town", "village", "hamlet", "suburb", "borough", "county", "state", "country"}
)

# Object / point-of-interest keys; "highway" is how roads are keyed
OBJECT_KEYS = frozenset({"highway", "amenity", "shop", "tourism", "leisure", "building"})


def is_place_like(props: PlaceProperties) -> bool:
    """Whether a feature may be offered when only cities are wanted.

    Features that are neither clearly a place nor clearly an object (natural
    features, for instance) are kept so the list does not empty out.
    """
    if props.osm_key in PLACE_KEYS:
        return True
    if props.osm_value in PLACE_VALUES:
        return True
    if props.osm_key in OBJECT_KEYS:
        return False
    return True


def build_title(props: PlaceProperties) -> str:
    return (
        props.name
        or props.city
        or props.town
        or props.village
        or props.state
        or UNKNOWN_LOCATION
    )


def build_subtitle(props: PlaceProperties, title: str, only_cities: bool = False) -> str:
    """Comma-joined disambiguating parts, never repeating the title."""
    parts: list[str] = []

    if not only_cities and props.street:
        parts.append(f"{props.street} {props.housenumber or ''}".strip())

    if props.city and props.city != title:
        parts.append(props.city)
    elif props.town and props.town != title:
        parts.append(props.town)
    elif props.village and props.village != title:
        parts.append(props.village)

    if props.state and props.state != title:
        parts.append(props.state)
    if props.country and props.country != title:
        parts.append(props.country)

    unique: list[str] = []
    for part in parts:
        if part and part not in unique:
            unique.append(part)
    return ", ".join(unique)


def to_suggestion(feature: PlaceFeature, only_cities: bool = False) -> PlaceSuggestion:
    props = feature.properties
    title = build_title(props)
    subtitle = build_subtitle(props, title, only_cities)
    return PlaceSuggestion(
        name=f"{title}, {subtitle}" if subtitle else title,
        title=title,
        subtitle=subtitle,
        lat=feature.lat,
        lng=feature.lng,
    )


def to_suggestions(
    features: list[PlaceFeature], only_cities: bool = False, cap: int = 10
) -> list[PlaceSuggestion]:
    """Filter (when ``only_cities``), cap, and map features to suggestions."""
    if only_cities:
        features = [f for f in features if is_place_like(f.properties)]
    return [to_suggestion(f, only_cities) for f in features[:cap]]

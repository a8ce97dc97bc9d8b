"""Travelling-salesman tours over cities read from a coordinate file."""

from __future__ import annotations

import math
import re
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from citytour.location import Location, distance

MAX_CITIES = 100

_NUMBER = re.compile(
    r"\s*([+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


class TourError(ValueError):
    """Raised when cities cannot be read or a tour cannot be built."""


@dataclass(frozen=True)
class City:
    """A named city, its coordinates and its position in the input."""

    name: str
    loc: Location
    index: int


def route_nearest(tour: Sequence[City]) -> list[City]:
    """Return a tour built by the nearest-neighbour method from the first city."""
    cities = list(tour)
    current = 0
    for position in range(1, len(cities)):
        nearest = find_closest_city(cities, current, position, len(cities) - 1)
        if nearest is not None:
            cities[position], cities[nearest] = cities[nearest], cities[position]
            current = position
    return normalize_direction(normalize_start(cities))


def find_closest_city(tour: Sequence[City], c: int, start: int, stop: int) -> int | None:
    """Return the position among tour[start..stop] (inclusive) closest to tour[c].

    The city at position ``c`` itself is skipped; ties keep the first found.
    Returns None when the range holds no other city.
    """
    origin = tour[c].loc
    best: int | None = None
    best_distance = math.inf
    for position, city in enumerate(tour[start : stop + 1], start):
        if position == c:
            continue
        d = distance(origin, city.loc)
        if d < best_distance:
            best_distance = d
            best = position
    return best


def route_insert(tour: Sequence[City]) -> list[City]:
    """Return a tour built by the cheapest-insertion method."""
    cities = list(tour)
    if len(cities) < 2:
        return cities
    first, second = find_closest_pair(cities)
    cities[0], cities[first] = cities[first], cities[0]
    cities[1], cities[second] = cities[second], cities[1]

    for subtour_len in range(2, len(cities)):
        closest = find_closest_to_tour(cities, subtour_len)
        position = find_insertion_point(cities, subtour_len, closest)
        cities[closest], cities[subtour_len] = cities[subtour_len], cities[closest]
        cities.insert(position, cities.pop(subtour_len))
    return normalize_direction(normalize_start(cities))


def find_closest_pair(tour: Sequence[City]) -> tuple[int, int]:
    """Return the positions (i, j), i < j, of the two closest cities."""
    best: tuple[int, int] | None = None
    best_distance = math.inf
    for i, a in enumerate(tour):
        for j in range(i + 1, len(tour)):
            d = distance(a.loc, tour[j].loc)
            if d < best_distance:
                best_distance = d
                best = (i, j)
    if best is None:
        raise TourError("a closest pair needs at least two cities")
    return best


def find_closest_to_tour(tour: Sequence[City], tour_len: int) -> int:
    """Return the position of the city outside tour[:tour_len] closest to it."""
    members = tour[:tour_len]
    member_indices = {city.index for city in members}
    best: int | None = None
    best_distance = math.inf
    for position, city in enumerate(tour):
        if city.index in member_indices:
            continue
        for member in members:
            d = distance(city.loc, member.loc)
            if d < best_distance:
                best_distance = d
                best = position
    if best is None:
        raise TourError("no city lies outside the subtour")
    return best


def find_insertion_point(tour: Sequence[City], subtour_len: int, candidate: int) -> int:
    """Return where to insert tour[candidate] into tour[:subtour_len] at least cost."""
    subtour = tour[:subtour_len]
    new_loc = tour[candidate].loc
    best_increment = math.inf
    insertion_point = 0
    successors = subtour[1:] + subtour[:1]
    for position, (here, after) in enumerate(zip(subtour, successors)):
        original = distance(here.loc, after.loc)
        updated = distance(here.loc, new_loc) + distance(new_loc, after.loc)
        increment = updated - original
        if increment < best_increment:
            best_increment = increment
            insertion_point = position + 1
    return insertion_point


def normalize_start(tour: Sequence[City]) -> list[City]:
    """Return the tour rotated so that the city with index 0 comes first."""
    cities = list(tour)
    start = next((pos for pos, city in enumerate(cities) if city.index == 0), 0)
    return cities[start:] + cities[:start]


def normalize_direction(tour: Sequence[City]) -> list[City]:
    """Return the tour reversed if needed so the second index is below the last."""
    cities = list(tour)
    if len(cities) >= 2 and cities[1].index > cities[-1].index:
        return [cities[0], *cities[:0:-1]]
    return cities


def calculate_total(tour: Sequence[City]) -> float:
    """Return the length in km of the closed tour."""
    if not tour:
        raise TourError("an empty tour has no length")
    successors = list(tour[1:]) + [tour[0]]
    return sum(distance(a.loc, b.loc) for a, b in zip(tour, successors))


def valid_city_name(name: str) -> bool:
    """Return True if the name does not start with '-' and has no comma or newline."""
    return not name.startswith("-") and "," not in name and "\n" not in name


def valid_latitude(latitude: float) -> bool:
    """Return True if the latitude lies within [-90, 90]."""
    return -90.0 <= latitude <= 90.0


def valid_longitude(longitude: float) -> bool:
    """Return True if the longitude lies within [-180, 180]."""
    return -180.0 <= longitude <= 180.0


def _take_number(text: str) -> tuple[float, str] | None:
    match = _NUMBER.match(text)
    if match is None:
        return None
    return float(match.group(1)), text[match.end() :]


def _parse_line(line: str) -> tuple[str, float, float] | None:
    name, comma, rest = line.partition(",")
    if not name or not comma:
        return None
    parsed = _take_number(rest)
    if parsed is None:
        return None
    latitude, rest = parsed
    if not rest.startswith(","):
        return None
    parsed = _take_number(rest[1:])
    if parsed is None:
        return None
    longitude, _ = parsed
    return name, latitude, longitude


def read_cities(lines: Iterable[str], limit: int = MAX_CITIES) -> list[City]:
    """Read up to ``limit`` cities from lines of the form name,lat,lon.

    Lines with an invalid name or coordinates out of range are skipped.
    Raises TourError on a line that does not have that form.
    """
    cities: list[City] = []
    for line in lines:
        if len(cities) >= limit:
            break
        parsed = _parse_line(line)
        if parsed is None:
            raise TourError(f"malformed city line: {line!r}")
        name, latitude, longitude = parsed
        if not (
            valid_city_name(name)
            and valid_latitude(latitude)
            and valid_longitude(longitude)
        ):
            continue
        cities.append(City(name, Location(latitude, longitude), len(cities)))
    return cities


def check_city_order(cities: Sequence[City], names: Sequence[str]) -> bool:
    """Return True if the names match the cities' names one for one, in order."""
    return len(cities) == len(names) and all(
        city.name == name for city, name in zip(cities, names)
    )


def format_route(label: str, total: float, tour: Sequence[City], names: Sequence[str]) -> str:
    """Return one output line: label, total length and the closed route."""
    stops = [names[city.index] for city in tour]
    stops.append(names[tour[0].index])
    return f"{label:<10}: {total:12.2f}" + "".join(f" {stop}" for stop in stops)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the tour heuristics named on the command line; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        return 1

    try:
        with open(args[0], encoding="utf-8", errors="surrogateescape") as handle:
            cities = read_cities(handle)
    except (OSError, TourError):
        return 1
    if not cities:
        return 1

    rest = args[1:]
    heuristics: list[str] = []
    for arg in rest:
        if not arg.startswith("-"):
            break
        heuristics.append(arg)
    cmd_names = rest[len(heuristics) :]

    if cmd_names:
        if not check_city_order(cities, cmd_names):
            return 1
        names = cmd_names
    else:
        names = [city.name for city in cities]

    given = list(cities)
    tour = list(cities)
    for method in heuristics:
        if method == "-given":
            print(format_route(method, calculate_total(given), given, names))
            continue
        if method == "-insert":
            tour = route_insert(tour)
        elif method == "-nearest":
            tour = route_nearest(tour)
        tour = normalize_direction(normalize_start(tour))
        print(format_route(method, calculate_total(tour), tour, names))
    return 0
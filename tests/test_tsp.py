import pytest

from citytour.location import Location, distance
from citytour.tsp import (
    City,
    TourError,
    calculate_total,
    check_city_order,
    find_closest_city,
    find_closest_pair,
    find_closest_to_tour,
    find_insertion_point,
    format_route,
    main,
    normalize_direction,
    normalize_start,
    read_cities,
    route_insert,
    route_nearest,
    valid_city_name,
    valid_latitude,
    valid_longitude,
)

CITY_LINES = [
    "HVN,41.26388889,-72.88694444\n",
    "PVD,41.72388889,-71.42833333\n",
    "MHT,42.93277778,-71.43583333\n",
    "BDL,41.93916667,-72.68333333\n",
    "ORH,42.26722222,-71.87555556\n",
    "ALB,42.74916667,-73.80194444\n",
]


def equator(lons):
    return [City(f"C{i}", Location(0.0, lon), i) for i, lon in enumerate(lons)]


def indices(tour):
    return [city.index for city in tour]


def by_index(indexes):
    return [City(f"C{i}", Location(0.0, float(i)), i) for i in indexes]


def test_route_nearest_on_equator():
    tour = equator([0.0, 3.0, 1.0, 10.0, 2.0])
    assert indices(route_nearest(tour)) == [0, 2, 4, 1, 3]


def test_route_nearest_does_not_mutate_input():
    tour = equator([0.0, 3.0, 1.0])
    before = list(tour)
    route_nearest(tour)
    assert tour == before


def test_route_insert_collinear_total_is_twice_span():
    tour = equator([0.0, 3.0, 1.0, 10.0, 2.0])
    result = route_insert(tour)
    assert sorted(indices(result)) == [0, 1, 2, 3, 4]
    assert result[0].index == 0
    span = distance(Location(0.0, 0.0), Location(0.0, 10.0))
    assert calculate_total(result) == pytest.approx(2 * span, rel=1e-9)


def test_route_insert_is_normalized_permutation():
    cities = read_cities(CITY_LINES)
    result = route_insert(cities)
    assert sorted(indices(result)) == list(range(len(cities)))
    assert result[0].index == 0
    assert result[1].index < result[-1].index


def test_route_insert_single_city():
    tour = equator([5.0])
    assert route_insert(tour) == tour


def test_find_closest_city():
    tour = equator([0.0, 5.0, 2.0])
    assert find_closest_city(tour, 0, 1, 2) == 2


def test_find_closest_city_skips_self():
    tour = equator([0.0, 5.0, 2.0])
    assert find_closest_city(tour, 1, 1, 1) is None
    assert find_closest_city(tour, 1, 0, 2) == 2


def test_find_closest_pair():
    tour = equator([0.0, 20.0, 21.0])
    assert find_closest_pair(tour) == (1, 2)


def test_find_closest_pair_needs_two():
    with pytest.raises(TourError):
        find_closest_pair(equator([1.0]))


def test_find_closest_to_tour():
    tour = equator([0.0, 1.0, 50.0, 3.0])
    assert find_closest_to_tour(tour, 2) == 3


def test_find_closest_to_tour_without_outside_city():
    with pytest.raises(TourError):
        find_closest_to_tour(equator([0.0, 1.0]), 2)


def test_find_insertion_point():
    tour = [
        City("A", Location(0.0, 0.0), 0),
        City("B", Location(0.0, 10.0), 1),
        City("C", Location(10.0, 5.0), 2),
        City("D", Location(0.0, 5.0), 3),
    ]
    assert find_insertion_point(tour, 3, 3) == 1


def test_normalize_start():
    assert indices(normalize_start(by_index([2, 0, 1]))) == [0, 1, 2]


def test_normalize_start_without_zero_keeps_order():
    assert indices(normalize_start(by_index([2, 3, 1]))) == [2, 3, 1]


def test_normalize_direction_reverses():
    assert indices(normalize_direction(by_index([0, 3, 1, 2]))) == [0, 2, 1, 3]


def test_normalize_direction_keeps():
    assert indices(normalize_direction(by_index([0, 1, 3, 2]))) == [0, 1, 3, 2]


def test_calculate_total_two_cities():
    tour = equator([0.0, 7.0])
    expected = 2 * distance(tour[0].loc, tour[1].loc)
    assert calculate_total(tour) == pytest.approx(expected)


def test_calculate_total_is_rotation_invariant():
    cities = read_cities(CITY_LINES)
    rotated = cities[2:] + cities[:2]
    assert calculate_total(rotated) == pytest.approx(calculate_total(cities))


def test_calculate_total_single_and_empty():
    assert calculate_total(equator([3.0])) == 0.0
    with pytest.raises(TourError):
        calculate_total([])


@pytest.mark.parametrize(
    "name, ok",
    [("HVN", True), ("New Haven", True), ("-HVN", False), ("A\nB", False), ("A,B", False)],
)
def test_valid_city_name(name, ok):
    assert valid_city_name(name) is ok


def test_valid_coordinates():
    assert valid_latitude(90.0) and valid_latitude(-90.0)
    assert not valid_latitude(90.5)
    assert not valid_latitude(float("nan"))
    assert valid_longitude(180.0) and valid_longitude(-180.0)
    assert not valid_longitude(-180.5)


def test_read_cities():
    cities = read_cities(CITY_LINES)
    assert [c.name for c in cities] == ["HVN", "PVD", "MHT", "BDL", "ORH", "ALB"]
    assert indices(cities) == list(range(6))
    assert cities[0].loc == Location(41.26388889, -72.88694444)


def test_read_cities_skips_invalid_entries():
    lines = ["A,95,0\n", "-B,1,1\n", "C,1,200\n", "D,1,2\n"]
    cities = read_cities(lines)
    assert [(c.name, c.index) for c in cities] == [("D", 0)]


def test_read_cities_allows_spaces_before_numbers():
    cities = read_cities(["X, 1.5, -2.5\n"])
    assert cities[0].loc == Location(1.5, -2.5)


@pytest.mark.parametrize("line", ["nonsense\n", "\n", "X,1.0 ,2.0\n", ",1,2\n", "X,abc,2\n"])
def test_read_cities_malformed(line):
    with pytest.raises(TourError):
        read_cities(["A,1,2\n", line])


def test_read_cities_limit():
    cities = read_cities(CITY_LINES, 3)
    assert [c.name for c in cities] == ["HVN", "PVD", "MHT"]


def test_check_city_order():
    cities = read_cities(CITY_LINES[:2])
    assert check_city_order(cities, ["HVN", "PVD"]) is True
    assert check_city_order(cities, ["PVD", "HVN"]) is False
    assert check_city_order(cities, ["HVN"]) is False


def test_format_route():
    tour = [City("A", Location(0.0, 0.0), 0), City("B", Location(0.0, 1.0), 1)]
    line = format_route("-given", 1234.5, tour, ["A", "B"])
    assert line == "-given    :      1234.50 A B A"


def _write(tmp_path, lines):
    path = tmp_path / "cities.txt"
    path.write_text("".join(lines))
    return str(path)


def test_main_without_command_line_cities(tmp_path, capsys):
    path = _write(tmp_path, CITY_LINES[:3])
    assert main([path, "-insert"]) == 0
    out = capsys.readouterr().out.strip()
    stops = out.split(":")[1].split()[1:]
    assert stops[0] == "HVN" and stops[-1] == "HVN"
    assert sorted(stops[:-1]) == ["HVN", "MHT", "PVD"]


def test_main_errors(tmp_path, capsys):
    path = _write(tmp_path, CITY_LINES[:2])
    assert main([]) == 1
    assert main([str(tmp_path / "missing.txt")]) == 1
    assert main([path, "-given", "PVD", "HVN"]) == 1
    assert main([_write(tmp_path, [])]) == 1
    assert capsys.readouterr().out == ""
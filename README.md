# citytour

Builds round trips through a set of cities and reports how long they are.
Distances between points are measured on the WGS-84 ellipsoid with
Vincenty's inverse formula. If that formula does not converge within 100
iterations, a spherical earth of radius 6371 km is used instead.

## Installation

```
pip install .
```

## Command line

```
citytour CITIES_FILE [-given] [-nearest] [-insert] [NAME ...]
```

`CITIES_FILE` holds one city per line, in the form `name,latitude,longitude`:

```
HVN,41.26388889,-72.88694444
PVD,41.72388889,-71.42833333
MHT,42.93277778,-71.43583333
```

The command reads at most 100 cities. It skips a line when the name starts
with `-`, when the latitude is outside [-90, 90], or when the longitude is
outside [-180, 180]. If a line is not in the `name,lat,lon` form at all, the
whole file is rejected.

Every argument after the file that starts with `-` names a heuristic. The
heuristics run in the order you give them:

- `-given`: the tour in the order the cities appear in the file
- `-nearest`: nearest neighbour, starting from the first city of the current
  tour
- `-insert`: begins with the closest pair of cities, then keeps adding the
  city closest to the tour at the point where it adds the least length

`-nearest` and `-insert` work on the tour left by the heuristic before them,
not on a fresh copy of the file order. Any other option that starts with `-`
prints the current tour unchanged, apart from normalisation.

Each heuristic prints one line. The line holds its label, the tour length in
kilometres and the closed tour. Every tour starts and ends at the first city
of the file. It runs in the direction where the second stop has a lower file
position than the last stop:

```
citytour cities.txt -given -nearest -insert HVN PVD MHT
```

If you list city names after the options, they must match the file's cities
exactly and in the same order, and those names are the ones printed.

The command exits with status 1 when no file is given, when the file cannot
be read, when it has a malformed line, when it holds no usable cities, or when
the listed names do not match the file. Otherwise it exits with status 0.

## Library use

```python
from citytour.location import Location, distance
from citytour.tsp import City, route_insert, calculate_total, format_route

hvn = Location(41.26388889, -72.88694444)
pvd = Location(41.72388889, -71.42833333)
print(distance(hvn, pvd))      # kilometres
print(hvn.distance_to(pvd))    # same value

cities = [
    City("HVN", hvn, 0),
    City("PVD", pvd, 1),
    City("MHT", Location(42.93277778, -71.43583333), 2),
]
tour = route_insert(cities)
names = [c.name for c in cities]
print(format_route("-insert", calculate_total(tour), tour, names))
```

`citytour.location` also provides `distance_spherical` and `distance_oblate`.
Each distance function returns NaN when a location is invalid. A location is
invalid when its latitude is outside [-90, 90] or either coordinate is not
finite.

`citytour.tsp` also provides:

- `read_cities(lines, limit)`, which reads cities from an iterable of lines
- `route_nearest`, which builds a nearest-neighbour tour
- `normalize_start` and `normalize_direction`, which put a tour in the
  standard form
- `check_city_order`, which checks city names against a list of names
- a few lower-level helpers used by the heuristics

Malformed input and tours that cannot be built raise `TourError`, a subclass
of `ValueError`.

## What it does not do

citytour only offers the nearest-neighbour and cheapest-insertion
heuristics. It does not search for an optimal tour, does not improve tours
after they are built, and prints plain text only.
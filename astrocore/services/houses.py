from .constants import sign_index_from_lon


def house_of(sign_index: int, asc_sign_index: int) -> int:
    # Whole-sign: the ascendant's sign is house 1, then signs in order.
    return ((sign_index - asc_sign_index + 12) % 12) + 1


def house_of_lon(lon: float, asc_lon: float) -> int:
    return house_of(sign_index_from_lon(lon), sign_index_from_lon(asc_lon))


def whole_sign_houses(asc_lon: float) -> list[int]:
    # Return the sign index for houses 1..12:
    # House 1 = ascendant's sign; next signs in order
    start = sign_index_from_lon(asc_lon)
    return [(start + i) % 12 for i in range(12)]

import enum

''' The four hash functions the benchmark compares.
    Each is a pure function of a key and the table size m (plus, for universal hashing, the table's random
    coefficients) returning a bucket index in [0, m).
    HashStrategy wraps them as a closed set that a ChainedHashTable can be handed per operation.
'''

# Fractional part of the golden ratio, Knuth's suggested multiplier
GOLDEN_FRACTION = 0.6180339887

MID_SQUARE_MIN_DIGITS = 5
MID_SQUARE_WINDOW = 3

def division(key, m):
    return (key % m + m) % m

def multiplication(key, m, A=GOLDEN_FRACTION):
    # Python's float % is floored, so frac lands in [0, 1) for negative keys too
    frac = (key * A) % 1.0
    return int(m * frac) % m

def mid_square(key, m):
    ''' Index from the (up to) three digits around the middle of key**2.
        The square is zero-padded to at least 5 digits first. The window starts one left of the midpoint
        and is clipped at the end of the string.
        A window that isn't all decimal digits (e.g. a non-integral key) falls back to index 0.
    '''
    digits = str(key * key).zfill(MID_SQUARE_MIN_DIGITS)
    mid = len(digits) // 2
    start = max(0, mid - 1)
    length = min(MID_SQUARE_WINDOW, len(digits) - start)
    window = digits[start:start + length]
    if not (window.isascii() and window.isdigit()):
        return 0
    return int(window) % m

def universal(key, m, b, c, p):
    # % p is already non-negative in Python
    return ((b * key + c) % p) % m


class HashStrategy(enum.Enum):
    ''' A hash strategy is chosen per insert/remove call, never stored in the table.
        Members are callable as strategy(key, table), reading the table's size (and universal parameters).
    '''
    DIVISION = 'hashDivision'
    MULTIPLICATION = 'hashMultiplication'
    MID_SQUARE = 'hashMidSquare'
    UNIVERSAL = 'hashUniversal'

    @property
    def label(self):
        return self.value

    def __call__(self, key, table):
        if self is HashStrategy.UNIVERSAL:
            return universal(key, table.m, table.b, table.c, table.p)
        return _FUNCTIONS[self](key, table.m)

    @classmethod
    def parse(cls, name):
        ''' Resolve a CLI/config name ("division", "mid_square", "hashUniversal", ...) to a member. '''
        if isinstance(name, cls):
            return name
        normalized = str(name).strip()
        for member in cls:
            if normalized in (member.name, member.value):
                return member
        normalized = normalized.lower().replace('-', '_')
        aliases = {
            'division': cls.DIVISION,
            'multiplication': cls.MULTIPLICATION,
            'mid_square': cls.MID_SQUARE,
            'midsquare': cls.MID_SQUARE,
            'universal': cls.UNIVERSAL,
        }
        try:
            return aliases[normalized]
        except KeyError:
            raise ValueError(f"Unknown hash strategy: {name} (expected one of {', '.join(aliases)})") from None


_FUNCTIONS = {
    HashStrategy.DIVISION: division,
    HashStrategy.MULTIPLICATION: multiplication,
    HashStrategy.MID_SQUARE: mid_square,
}

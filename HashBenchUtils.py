import random
import json

''' HashBenchUtils provides the common, opinionated utilities that the hash table and the benchmark driver both use.
    Here, we encapsulate the number theory the universal hash family needs (finding the prime it works modulo),
    the synthetic datasets the benchmark suite is run over, and the errors that the table and prime search raise.

    All arithmetic here mirrors a 32-bit signed world: the prime search and the adversarial dataset are both bounded by INT_MAX.
    Python integers never overflow, so the bound is explicit rather than implied by a machine word,
    which means "ran out of integers" is a real, reportable error instead of a silent wraparound.
'''

INT_MAX = 2 ** 31 - 1

# Custom Exceptions
class PrimeSearchExhaustedError(OverflowError):
    ''' Indicates the prime search walked off the end of the representable integer range. '''
    def __init__(self, start=None, limit=INT_MAX):
        super().__init__()
        self.start = start
        self.limit = limit
        self.args = (f'Cannot find prime number >= {start} below {limit}',)

class HashIndexError(IndexError):
    ''' Indicates a hash strategy produced an index outside of the table's [0, m) bucket range. '''
    def __init__(self, index=None, m=None):
        super().__init__()
        self.index = index
        self.m = m
        self.args = (f'Invalid hash index {index} for table of size {m}',)


# Prime utilities
def is_prime(num):
    if num <= 1: return False
    if num <= 3: return True
    if num % 2 == 0 or num % 3 == 0: return False
    # Every prime > 3 is of the form 6k-1 or 6k+1
    i = 5
    while i * i <= num:
        if num % i == 0 or num % (i + 2) == 0: return False
        i += 6
    return True

def find_next_prime(n, limit=INT_MAX):
    ''' Returns the smallest prime >= n.
        Even n start the search at n+1 and only odd candidates are tried after that.
        Raises PrimeSearchExhaustedError if the search reaches 'limit' without finding one.
    '''
    if n <= 1: return 2
    candidate = n + 1 if n % 2 == 0 else n
    while candidate < limit:
        if is_prime(candidate): return candidate
        candidate += 2
    raise PrimeSearchExhaustedError(n, limit)


# Dataset generators
''' Each generator produces a plain list of integer keys.
    The random ones accept a random.Random so that a seeded suite generates the same datasets every run;
    when none is passed they draw from a fresh, OS-seeded generator.
'''

def generate_favorable_data(size):
    ''' Keys 1..size: densely packed, the best case for division hashing. '''
    return list(range(1, size + 1))

def generate_moderate_data(size, rng=None):
    ''' size draws from [0, max(1, size/10)]: a narrow range, so plenty of duplicate keys. '''
    rng = rng or random.Random()
    hi = max(1, size // 10)
    return [rng.randint(0, hi) for _ in range(size)]

def generate_adversarial_data(size, rng=None):
    ''' size draws from the full non-negative int range. '''
    rng = rng or random.Random()
    return [rng.randint(0, INT_MAX) for _ in range(size)]

# opt/mid/worst are accepted as short names
DATA_KINDS = {
    'favorable': generate_favorable_data,
    'moderate': generate_moderate_data,
    'adversarial': generate_adversarial_data,
}
KIND_ALIASES = {
    'opt': 'favorable',
    'mid': 'moderate',
    'worst': 'adversarial',
}

def canonical_kind(kind):
    kind = KIND_ALIASES.get(kind, kind)
    if kind not in DATA_KINDS:
        raise ValueError(f"Unknown data type: {kind} (expected one of {', '.join(DATA_KINDS)})")
    return kind

def generate_data(kind, size, rng=None):
    kind = canonical_kind(kind)
    if kind == 'favorable':
        return DATA_KINDS[kind](size)
    return DATA_KINDS[kind](size, rng)


# Config utilities
def load_config(path):
    ''' Read a JSON config file into a dict of keyword arguments. '''
    with open(path) as config_file:
        try:
            config = json.load(config_file)
        except json.decoder.JSONDecodeError as e:
            raise ValueError(f'{path} is not valid JSON') from e
    if not isinstance(config, dict):
        raise ValueError(f'{path} must hold a JSON object mapping option names to values')
    return config

def err_desc(err):
    ''' Returns the error message, without annoying string wrapping by KeyError.
        Ex: str(KeyError('string'))      = "'string'".
            err_desc(KeyError('string')) =  'string'.
    '''
    return str(err) if type(err) is not KeyError else ",".join(map(str, err.args))

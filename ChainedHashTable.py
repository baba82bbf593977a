import HashBenchUtils as utils
import random

from sortedcontainers import SortedDict, SortedList

class ChainedHashTable:
    ''' A fixed-size hash table resolving collisions by chaining.
        Every bucket is a plain list of keys in insertion order; duplicates are kept (each bucket is a multiset).
        The table never resizes. Which hash function places a key is chosen by the caller on every
        insert/remove, so callers must stick to one strategy per logical dataset for removes to find their keys.
    '''
    # __str__ only lists this many non-empty buckets
    MAX_DUMPED_BUCKETS = 10

    def __init__(self, size, rng=None, verbose=False):
        if size <= 0:
            raise ValueError("Hash table size must be > 0")
        self.m = size
        self.verbose = verbose
        self.buckets = [[] for _ in range(self.m)]

        # Universal hashing parameters: fixed for the table's lifetime, b never 0
        self.p = utils.find_next_prime(self.m)
        rng = rng or random.Random()
        self.b = rng.randint(1, self.p - 1)
        self.c = rng.randint(0, self.p - 1)
        if self.verbose: print(f"[Table] Created {self.m} buckets, universal hash ({self.b}*k + {self.c}) mod {self.p}")

    def __len__(self):
        return sum(len(bucket) for bucket in self.buckets)

    def __str__(self):
        lines = [
            f"===== CHAINED HASH TABLE =====",
            f"-- Parameters --",
            f"\tBuckets (m): {self.m}",
            f"\tPrime (p): {self.p}",
            f"\tUniversal coefficients: b={self.b}, c={self.c}",
            f"-- Stored Data --",
            f"\tKeys: {len(self)}",
            f"\tLoad factor: {self.load_factor():.3f}",
        ]
        snapshot = self.snapshot()
        for index, keys in snapshot.items()[:self.MAX_DUMPED_BUCKETS]:
            lines.append(f"\t{index}: {list(keys)}")
        if len(snapshot) > self.MAX_DUMPED_BUCKETS:
            lines.append(f"\t... ({len(snapshot) - self.MAX_DUMPED_BUCKETS} more non-empty buckets)")
        return '\n'.join(lines)

    def index_of(self, key, strategy):
        return strategy(key, self)

    def insert(self, key, strategy):
        index = self.index_of(key, strategy)
        if index < 0 or index >= self.m:
            raise utils.HashIndexError(index, self.m)
        self.buckets[index].append(key)

    def remove(self, key, strategy):
        ''' Removes the first occurrence of key from its bucket.
            Returns whether anything was removed: an out-of-range index counts as "not found".
        '''
        index = self.index_of(key, strategy)
        if index < 0 or index >= self.m: return False
        bucket = self.buckets[index]
        try:
            bucket.remove(key)
        except ValueError:
            return False
        return True

    def clear(self):
        for bucket in self.buckets:
            bucket.clear()

    def load_factor(self):
        return len(self) / self.m

    def snapshot(self):
        ''' Bucket membership ignoring insertion order: non-empty bucket index -> sorted keys. '''
        return SortedDict({
            index: SortedList(bucket)
            for index, bucket in enumerate(self.buckets) if bucket
        })

from ChainedHashTable import ChainedHashTable
from HashStrategies import HashStrategy
import HashBenchUtils as utils
from time import perf_counter as now
import argparse
import collections
import random
import json

from sortedcontainers import SortedDict
from tqdm import tqdm

DEFAULT_SIZES = [10_000, 100_000, 1_000_000, 10_000_000]
DEFAULT_KINDS = ['favorable', 'moderate', 'adversarial']
DEFAULT_STRATEGIES = [strategy.name.lower() for strategy in HashStrategy]
DEFAULT_REPETITIONS = 100

# Tables are sized at LOAD_SPREAD times the dataset so chains stay short (load factor ~1/3)
# and the timings mostly reflect the hash function itself.
LOAD_SPREAD = 3

LABEL_WIDTH = max(len(strategy.label) for strategy in HashStrategy)

BenchmarkResult = collections.namedtuple('BenchmarkResult', ['label', 'insert_ms', 'remove_ms'])

def main():
    args = process_args()
    try:
        config = build_config(args)
    except (ValueError, KeyError, OSError) as e:
        args.parser.error(utils.err_desc(e))
    report = run_suite(**config)
    if config['output']:
        report.save(config['output'])
        print(f"\nWrote results to {config['output']}")

def process_args():
    parser = argparse.ArgumentParser(description="Benchmarks insertion and removal in a chained hash table under division, multiplication, mid-square and universal hashing.")
    parser.add_argument("-c", "--config", help="JSON file whose keys (sizes, kinds, strategies, repetitions, seed, verbose, progress, output) configure the run. Flags override it.")
    parser.add_argument("-s", "--sizes", type=int, nargs='+', help=f"Dataset sizes to benchmark (default: {' '.join(map(str, DEFAULT_SIZES))}).")
    parser.add_argument("-k", "--kinds", nargs='+', help=f"Key distributions to benchmark (default: {' '.join(DEFAULT_KINDS)}).")
    parser.add_argument("-f", "--strategies", nargs='+', help=f"Hash strategies to benchmark (default: {' '.join(DEFAULT_STRATEGIES)}).")
    parser.add_argument("-r", "--repetitions", type=int, help=f"Fresh tables built per (size, kind, strategy) (default: {DEFAULT_REPETITIONS}).")
    parser.add_argument("--seed", type=int, help="Seed datasets and universal hashing parameters for a reproducible run.")
    parser.add_argument("-o", "--output", help="Also write the results to this JSON file.")
    parser.add_argument("-p", "--progress", action='store_true', default=None, help="If present, show a progress bar over repetitions.")
    parser.add_argument("-v", "--verbose", action='store_true', default=None, help="If present, output logging/debugging information to stdout.")
    args = parser.parse_args()
    args.parser = parser
    return args

def build_config(args=None, **overrides):
    ''' Merge defaults, the JSON config file (if any) and explicitly given flags, in increasing precedence. '''
    config = {
        'sizes': DEFAULT_SIZES,
        'kinds': DEFAULT_KINDS,
        'strategies': DEFAULT_STRATEGIES,
        'repetitions': DEFAULT_REPETITIONS,
        'seed': None,
        'output': None,
        'progress': False,
        'verbose': False,
    }
    if args is not None and args.config:
        from_file = utils.load_config(args.config)
        unknown = set(from_file) - set(config)
        if unknown:
            raise ValueError(f"Unknown config option(s): {', '.join(sorted(unknown))}")
        config.update(from_file)
    if args is not None:
        config.update({
            key: value for key in config
            if (value := getattr(args, key, None)) is not None
        })
    config.update(overrides)

    # Validate eagerly so that typos fail before hours of benchmarking
    config['kinds'] = [utils.canonical_kind(kind) for kind in config['kinds']]
    config['strategies'] = [HashStrategy.parse(name) for name in config['strategies']]
    if any(size <= 0 for size in config['sizes']):
        raise ValueError("Dataset sizes must be > 0")
    if config['repetitions'] <= 0:
        raise ValueError("Repetitions must be > 0")
    return config


def benchmark_hash_function(data, strategy, label=None, repetitions=DEFAULT_REPETITIONS, rng=None, after_insert=None, progress=False, verbose=False):
    ''' Time bulk insertion and bulk removal of 'data' under 'strategy'.
        Each repetition gets a fresh table of LOAD_SPREAD * len(data) buckets, inserts every key, then removes every
        key in the same order. Table contents are not checked afterwards: this is purely a throughput measurement.
        'after_insert', if given, is called with the populated table outside of the timed regions.
        Returns the mean milliseconds per insert pass and per remove pass.
    '''
    if repetitions <= 0:
        raise ValueError("Repetitions must be > 0")
    if len(data) == 0:
        raise ValueError("Cannot benchmark an empty dataset")
    if label is None:
        label = getattr(strategy, 'label', getattr(strategy, '__name__', repr(strategy)))
    rng = rng or random.Random()

    total_insert = 0.0
    total_remove = 0.0
    for repetition in tqdm(range(repetitions), desc=label, leave=False, disable=not progress):
        table = ChainedHashTable(len(data) * LOAD_SPREAD, rng, verbose=verbose)

        start = now()
        for key in data:
            table.insert(key, strategy)
        stop = now()
        total_insert += stop - start

        if after_insert is not None:
            after_insert(table)
        if verbose and repetition == 0:
            print(f"[Runner] {label}: table after the first insert pass:")
            print(table)

        start = now()
        for key in data:
            table.remove(key, strategy)
        stop = now()
        total_remove += stop - start

    result = BenchmarkResult(label, total_insert / repetitions * 1000.0, total_remove / repetitions * 1000.0)
    if verbose: print(f"[Runner] {label}: {repetitions} repetitions over {len(data)} keys took {total_insert + total_remove:.3f} s")
    return result

def format_result(result):
    return f"{result.label:<{LABEL_WIDTH}} | Avg Insert: {result.insert_ms:.3f} ms | Avg Remove: {result.remove_ms:.3f} ms"


class BenchmarkReport:
    ''' Collects results keyed by (size, kind, strategy), kept in suite order regardless of the order they arrive in. '''
    def __init__(self, kinds=DEFAULT_KINDS, strategies=tuple(HashStrategy)):
        self.kind_order = {kind: i for i, kind in enumerate(kinds)}
        self.strategy_order = {strategy.label: i for i, strategy in enumerate(strategies)}
        self.results = SortedDict(self._sort_key)

    def _sort_key(self, key):
        size, kind, label = key
        return (size, self.kind_order.get(kind, len(self.kind_order)), self.strategy_order.get(label, len(self.strategy_order)), kind, label)

    def add(self, size, kind, result):
        self.results[(size, kind, result.label)] = result

    def __len__(self):
        return len(self.results)

    def __iter__(self):
        for (size, kind, _), result in self.results.items():
            yield size, kind, result

    def to_json(self):
        return [
            {
                'size': size,
                'kind': kind,
                'strategy': result.label,
                'insert_ms': round(result.insert_ms, 3),
                'remove_ms': round(result.remove_ms, 3),
            }
            for size, kind, result in self
        ]

    def save(self, path):
        with open(path, 'w') as out_file:
            json.dump(self.to_json(), out_file, indent=4)


def run_suite(sizes=DEFAULT_SIZES, kinds=DEFAULT_KINDS, strategies=tuple(HashStrategy), repetitions=DEFAULT_REPETITIONS, seed=None, output=None, progress=False, verbose=False):
    ''' Benchmark every strategy on every (size, kind) dataset, printing each result as it completes.
        Datasets are generated once per (size, kind) and shared by all strategies.
        'output' is accepted so a full config dict can be splatted in; saving is left to the caller.
    '''
    rng = random.Random(seed)
    strategies = [HashStrategy.parse(strategy) for strategy in strategies]
    kinds = [utils.canonical_kind(kind) for kind in kinds]
    report = BenchmarkReport(kinds, strategies)
    for size in sizes:
        print(f"\n==== SIZE: {size} ====")
        for kind in kinds:
            print(f"Data type: {kind}")
            data = utils.generate_data(kind, size, rng)
            if verbose: print(f"[Runner] Generated {len(data)} {kind} keys ({len(set(data))} distinct)")
            for strategy in strategies:
                result = benchmark_hash_function(data, strategy, repetitions=repetitions, rng=rng, progress=progress, verbose=verbose)
                report.add(size, kind, result)
                print(format_result(result))
    return report


if __name__ == "__main__":
    main()

import logging
from dataclasses import replace

from .config import HEADLESS, RunConfig
from .envs import create_test_environment, sample_geo_space
from .pacer import Pacer
from .registry import ALGORITHMS
from .search import SearchEngine
from .utils import format_ms


def run_headless(engine, space, start, goal, config: RunConfig):
    return engine.run(space, start, goal, config.algorithm, pacer=Pacer.from_config(config),
                      diagonal=config.diagonal, reveal_path=config.reveal_path, seed=config.seed)


def run_console_test(seed: int = 7):
    print("=== Pathfinding Algorithms Console Test ===")
    space = create_test_environment()
    print(f"Grid: {space.rows}x{space.cols}, start={space.start}, end={space.end}, "
          f"walkable={space.walkable_count()}")
    print()
    print(f"{'Algorithm':<26}{'Visited':>9}{'Path':>7}{'Time':>12}")
    print("-" * 54)

    engine = SearchEngine()
    config = replace(HEADLESS, seed=seed)
    for algo_id, info in ALGORITHMS.items():
        result = run_headless(engine, space, space.start, space.end, config.with_algorithm(algo_id))
        print(f"{info.name:<26}{result.visited:>9}{result.path_length:>7}"
              f"{format_ms(result.elapsed_ms):>12}")
    return space


def run_geo_test():
    print("=== Geographic Search Console Test ===")
    start, end = (40.7128, -74.0060), (40.7168, -74.0010)
    space = sample_geo_space(start, end)
    result = run_headless(SearchEngine(), space, start, end, HEADLESS)
    print(f"Obstacles: {len(space.obstacles)}")
    print(f"Visited: {result.visited}")
    print(f"Path length: {result.path_length}")
    print(f"Time: {format_ms(result.elapsed_ms)}")
    return result


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    run_console_test()
    print()
    run_geo_test()

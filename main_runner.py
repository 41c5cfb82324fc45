"""
Main Runner for the Pathfinding Visualizer
Provides menu-driven access to the pygame viewer and the console comparisons
"""

import logging
import sys


def print_banner():
    """Print application banner"""
    print("=" * 70)
    print("    PATHFINDING ALGORITHMS - STEP-BY-STEP VISUALIZATION")
    print("=" * 70)
    print()


def print_menu():
    """Print the main menu"""
    print("Available Options:")
    print()
    print("1. Grid Viewer (Pygame)")
    print("   - Draw walls, drag start/end")
    print("   - Pause, resume and adjust speed while the search runs")
    print()
    print("2. Custom Grid Viewer")
    print("   - Choose grid size and starting speed")
    print()
    print("3. Console Comparison")
    print("   - Every algorithm on the same grid, visited nodes and path length")
    print()
    print("4. Geographic Search Demo")
    print("   - A* over a lat/lng lattice with obstacle points")
    print()
    print("0. Exit")
    print()


def run_viewer(rows=None, cols=None, cell_size=25, speed=None):
    """Run the pygame grid viewer"""
    print("Starting Pathfinding Visualizer with Pygame...")
    try:
        from pathviz.pathviz_engine.constants import GRID_ROWS, GRID_COLS, DEFAULT_SPEED
        from pathviz.pathviz_pygame.visualizer_app import PathfindingVisualizer
        visualizer = PathfindingVisualizer(rows=rows or GRID_ROWS, cols=cols or GRID_COLS,
                                           cell_size=cell_size, speed=speed or DEFAULT_SPEED)
        visualizer.run()
    except ImportError as e:
        print(f"Error importing Pygame visualization: {e}")
        print("Make sure pygame is installed")


def run_custom_viewer():
    """Run the viewer with a custom configuration"""
    print()
    print("Custom Configuration:")
    print("Enter your preferred settings (press Enter for defaults)")

    rows_input = input("Rows (default 20): ").strip()
    rows = int(rows_input) if rows_input.isdigit() else 20
    rows = max(5, min(rows, 60))

    cols_input = input("Columns (default 30): ").strip()
    cols = int(cols_input) if cols_input.isdigit() else 30
    cols = max(5, min(cols, 80))

    speed_input = input("Speed 1-200 (default 50): ").strip()
    speed = int(speed_input) if speed_input.isdigit() else 50

    # Fit the grid into roughly 900x760 pixels
    cell_size = max(8, min(25, 900 // cols, 760 // rows))

    print(f"Running viewer with grid {rows}x{cols}, cell size {cell_size}, speed {speed}")
    run_viewer(rows=rows, cols=cols, cell_size=cell_size, speed=speed)


def run_console_comparison():
    """Run every algorithm headless and print a table"""
    from pathviz.pathviz_engine.main import run_console_test
    run_console_test()


def run_geo_demo():
    """Run A* over the sample geographic space"""
    from pathviz.pathviz_engine.main import run_geo_test
    run_geo_test()


def show_help():
    """Show help information"""
    from pathviz.pathviz_engine.registry import ALGORITHMS
    print()
    print("Help Information:")
    print("================")
    print()
    for index, info in enumerate(ALGORITHMS.values(), start=1):
        optimal = "optimal" if info.guarantees_optimal else "not optimal"
        print(f"{index}. {info.name} ({optimal})")
        print(f"   - {info.description}")
        print(f"   - Time {info.time_complexity}, space {info.space_complexity}")
    print()
    print("Visualization Controls:")
    print("- 1-8: Select algorithm")
    print("- S: Start   SPACE: Pause/Resume   R: Reset")
    print("- C: Clear walls   W: Random walls   D: Toggle diagonal moves")
    print("- Mouse: Draw walls, drag start/end, speed slider")
    print()


def main():
    """Main application entry point"""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    print_banner()

    while True:
        print_menu()

        try:
            choice = input("Select option (0-4, h for help): ").strip().lower()
            print()

            if choice == '0':
                print("Exiting application. Goodbye!")
                sys.exit(0)
            elif choice == '1':
                run_viewer()
            elif choice == '2':
                run_custom_viewer()
            elif choice == '3':
                run_console_comparison()
            elif choice == '4':
                run_geo_demo()
            elif choice in ('h', 'help'):
                show_help()
            else:
                print("Invalid choice. Please select a number from 0-4 or 'h' for help.")

            print()

        except KeyboardInterrupt:
            print("\n\nExiting application. Goodbye!")
            sys.exit(0)
        except ValueError as e:
            print(f"An error occurred: {e}")
            print()


if __name__ == '__main__':
    main()

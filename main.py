# Pathfinding Visualizer - Main Entry Point
# This file imports and runs the visualization

import logging

from pathviz.pathviz_pygame.visualizer_app import PathfindingVisualizer

if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    print("--- Pathfinding Visualization ---")
    print("Grid Size: 20x30")
    print("Starting GUI...")

    # Launch the visualization window
    visualizer = PathfindingVisualizer(rows=20, cols=30, cell_size=25)
    visualizer.run()

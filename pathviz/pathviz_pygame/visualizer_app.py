"""
Main app: event loop, grid editing, and the bridge between the search
runner and the renderer.
"""

import logging
import sys

import numpy as np
import pygame

from ..pathviz_engine.constants import GRID_ROWS, GRID_COLS, DEFAULT_SPEED, DEFAULT_WALL_DENSITY, WALL
from ..pathviz_engine.config import RunConfig
from ..pathviz_engine.controller import SearchRunner
from ..pathviz_engine.envs import create_test_environment
from ..pathviz_engine.registry import get_algorithm, list_algorithms
from ..pathviz_engine.space import GridSpace

from .visualizer_ui import (UIState, setup_ui_elements, handle_mouse_hover, update_slider,
                            set_running_buttons, cell_at)
from .visualizer_render import draw_grid, draw_info_panel
from .visualizer_callbacks import DisplayState, update_display, clear_display, finish_display

logger = logging.getLogger(__name__)


class PathfindingVisualizer:
    def __init__(self, rows=GRID_ROWS, cols=GRID_COLS, cell_size=25, speed=DEFAULT_SPEED):
        # ---------- config ----------
        self.rows = rows
        self.cols = cols
        self.cell_size = cell_size
        self.window_width = cols * cell_size
        self.window_height = rows * cell_size
        self.panel_width = 300
        self.total_width = self.window_width + self.panel_width
        self.total_height = max(self.window_height, 760)

        # ---------- search state ----------
        self.algorithms = list_algorithms()
        self.config = RunConfig(diagonal=False).with_speed(speed)
        self.drag_mode = None               # 'wall' | 'erase' | 'start' | 'end'
        self.rng = np.random.default_rng()

        if (rows, cols) == (GRID_ROWS, GRID_COLS):
            self.space = create_test_environment()
        else:
            self.space = GridSpace(rows, cols, start=(rows // 2, cols // 6),
                                   end=(rows // 2, cols - 1 - cols // 6))
        self.display = DisplayState(self.space)
        self.runner = SearchRunner.from_config(
            self.config,
            on_step=lambda event: update_display(self.display, event),
            on_clear=lambda: clear_display(self.display),
            on_complete=lambda result: finish_display(self.display, result),
        )

        # ---------- colors ----------
        self.colors = {
            'white': (255, 255, 255),
            'black': (0, 0, 0),
            'gray': (128, 128, 128),
            'light_gray': (211, 211, 211),
            'dark_gray': (64, 64, 64),
            'green': (0, 200, 0),
            'red': (220, 0, 0),
            'dark_red': (128, 0, 0),
            'blue': (0, 0, 255),
            'panel_bg': (240, 240, 240),
            'button_normal': (200, 200, 200),
            'button_hover': (180, 180, 180),
            'visited': (173, 216, 230),
            'frontier': (255, 215, 0),
            'path': (255, 20, 147),
            'tree_edge': (100, 149, 237),
        }

        # ---------- pygame ----------
        pygame.init()
        self.screen = pygame.display.set_mode((self.total_width, self.total_height))
        pygame.display.set_caption("Pathfinding Visualizer - Pygame")
        self.clock = pygame.time.Clock()

        self.font_large = pygame.font.Font(None, 24)
        self.font_medium = pygame.font.Font(None, 20)
        self.font_small = pygame.font.Font(None, 16)

        self.ui = UIState(self.window_width, self.panel_width, self.config.speed)
        setup_ui_elements(self.ui, self.colors)
        self.is_running = False

    @property
    def algorithm(self):
        return self.config.algorithm

    def set_speed(self, speed):
        self.config = self.config.with_speed(speed)
        self.runner.set_speed(self.config.speed)

    # ---------- events ----------
    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.is_running = False
                return False
            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:
                    self.handle_mouse_click(event.pos)
            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button == 1:
                    self.ui.dragging_slider = False
                    self.drag_mode = None
            elif event.type == pygame.MOUSEMOTION:
                if self.ui.dragging_slider:
                    self.set_speed(update_slider(self.ui, event.pos[0]))
                elif self.drag_mode is not None:
                    self.drag_edit(event.pos)
                else:
                    handle_mouse_hover(self.ui, self.colors, event.pos)
            elif event.type == pygame.KEYDOWN:
                self.handle_key(event)
        return True

    def handle_key(self, event):
        if event.key == pygame.K_SPACE:
            self.runner.toggle_pause()
        elif event.key == pygame.K_s:
            self.start_algorithm()
        elif event.key == pygame.K_r:
            self.reset_grid()
        elif self.runner.is_active:
            return
        elif event.key == pygame.K_c:
            with self.display.lock:
                self.space.clear_walls()
        elif event.key == pygame.K_w:
            self.random_walls()
        elif event.key == pygame.K_d:
            self.config = self.config.with_diagonal(not self.config.diagonal)
        elif pygame.K_1 <= event.key <= pygame.K_9:
            index = event.key - pygame.K_1
            if index < len(self.algorithms):
                self.config = self.config.with_algorithm(self.algorithms[index])

    def handle_mouse_click(self, pos):
        for btn_id, btn_data in self.ui.buttons.items():
            if btn_data['rect'].collidepoint(pos) and btn_data['enabled']:
                if btn_id == 'start':
                    self.start_algorithm()
                elif btn_id == 'pause':
                    self.runner.toggle_pause()
                elif btn_id == 'reset':
                    self.reset_grid()
                elif btn_id == 'walls':
                    self.random_walls()
                return
        if self.ui.slider_rect.collidepoint(pos):
            self.ui.dragging_slider = True
            self.set_speed(update_slider(self.ui, pos[0]))
            return

        cell = cell_at(pos, self.cell_size, self.rows, self.cols)
        if cell is None or self.runner.is_active:
            return
        with self.display.lock:
            if cell == self.space.start:
                self.drag_mode = 'start'
            elif cell == self.space.end:
                self.drag_mode = 'end'
            else:
                kind = self.space.toggle_wall(cell)
                self.drag_mode = 'wall' if kind == WALL else 'erase'

    def drag_edit(self, pos):
        cell = cell_at(pos, self.cell_size, self.rows, self.cols)
        if cell is None or self.runner.is_active:
            return
        with self.display.lock:
            if self.drag_mode == 'start':
                self.space.move_start(cell)
            elif self.drag_mode == 'end':
                self.space.move_end(cell)
            else:
                self.space.set_wall(cell, self.drag_mode == 'wall')

    # ---------- algorithm ----------
    def start_algorithm(self):
        if self.runner.is_active:
            return
        logger.info("Starting %s", get_algorithm(self.algorithm).name)
        self.runner.start_config(self.space, self.space.start, self.space.end, self.config)

    def reset_grid(self):
        self.runner.stop()
        self.runner.join(1.0)
        clear_display(self.display)

    def random_walls(self):
        with self.display.lock:
            self.space.clear_visualization()
            self.space.generate_random_walls(DEFAULT_WALL_DENSITY, self.rng)

    # ---------- draw ----------
    def draw_grid(self):
        with self.display.lock:
            result = self.display.result
            edges = result.edges if result is not None else ()
            tour = result.path if result is not None and result.algorithm == 'tsp' else ()
            return draw_grid(
                (self.window_width, self.window_height), self.cell_size,
                self.space.cells, self.colors, edges, tour,
            )

    def draw_info_panel(self):
        with self.display.lock:
            return draw_info_panel(
                self.panel_width, self.total_height,
                (self.font_large, self.font_medium, self.font_small), self.colors,
                get_algorithm(self.algorithm).name, self.runner.state.value, self.config.diagonal,
                self.display.visited_count, self.display.frontier_count, self.display.path_length,
                self.ui.slider_rect, self.ui.slider_handle, self.ui.speed,
                self.ui.buttons, self.display.result, self.window_width,
            )

    # ---------- main loop ----------
    def run(self):
        self.is_running = True
        while self.is_running:
            if not self.handle_events():
                break
            set_running_buttons(self.ui, self.runner.is_active, self.runner.is_paused)
            self.screen.fill(self.colors['white'])

            self.screen.blit(self.draw_grid(), (0, 0))
            self.screen.blit(self.draw_info_panel(), (self.window_width, 0))

            pygame.display.flip()
            self.clock.tick(60)

        self.runner.stop()
        pygame.quit()
        sys.exit()


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    print("--- Pathfinding Visualization (Pygame) ---")
    print(f"Grid Size: {GRID_ROWS}x{GRID_COLS}")
    print("Starting Pygame GUI...")
    PathfindingVisualizer().run()

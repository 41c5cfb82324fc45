import pygame

from ..pathviz_engine.constants import EMPTY, WALL, START, END, VISITED, FRONTIER, PATH


def cell_colors(colors):
    return {
        EMPTY: colors['white'],
        WALL: colors['black'],
        START: colors['green'],
        END: colors['red'],
        VISITED: colors['visited'],
        FRONTIER: colors['frontier'],
        PATH: colors['path'],
    }


def _center(coord, cell_size):
    r, c = coord
    return (c * cell_size + cell_size // 2, r * cell_size + cell_size // 2)


def draw_grid(surface_size, cell_size, cells, colors, edges=(), tour=()):
    grid_surface = pygame.Surface(surface_size)
    grid_surface.fill(colors['white'])
    palette = cell_colors(colors)

    rows, cols = cells.shape
    for r in range(rows):
        for c in range(cols):
            rect = pygame.Rect(c * cell_size, r * cell_size, cell_size, cell_size)
            pygame.draw.rect(grid_surface, palette.get(int(cells[r, c]), colors['white']), rect)
            pygame.draw.rect(grid_surface, colors['light_gray'], rect, 1)

    # spanning-tree edges
    for start_pos, end_pos in edges:
        pygame.draw.line(grid_surface, colors['tree_edge'],
                         _center(start_pos, cell_size), _center(end_pos, cell_size), 2)

    # tour legs
    if len(tour) > 1:
        points = [_center(p, cell_size) for p in tour]
        pygame.draw.lines(grid_surface, colors['path'], False, points, 3)
        for point in points:
            pygame.draw.circle(grid_surface, colors['dark_red'], point, max(3, cell_size // 4))

    return grid_surface


def draw_info_panel(panel_width, total_height, fonts, colors, algorithm_name, state_name,
                    diagonal, visited_count, frontier_count, path_length,
                    slider_rect, slider_handle, speed, buttons, result, window_size):
    font_large, font_medium, font_small = fonts
    panel_surface = pygame.Surface((panel_width, total_height))
    panel_surface.fill(colors['panel_bg'])

    y_offset = 20
    title_text = font_large.render(algorithm_name, True, colors['black'])
    panel_surface.blit(title_text, (20, y_offset))
    y_offset += 40

    info_texts = [
        f"State: {state_name}",
        f"Diagonal moves: {'on' if diagonal else 'off'}",
        f"Visited: {visited_count}",
        f"Frontier: {frontier_count}",
        f"Path Length: {path_length}",
    ]
    for text in info_texts:
        t = font_medium.render(text, True, colors['black'])
        panel_surface.blit(t, (20, y_offset))
        y_offset += 25

    # results
    if result is not None:
        y_offset += 10
        panel_surface.blit(font_medium.render("Results:", True, colors['black']), (20, y_offset))
        y_offset += 25
        outcome = "Path found" if result.found else "No path"
        if result.edges:
            outcome = f"Tree edges: {len(result.edges)}"
        for text in [
            outcome,
            f"Nodes visited: {result.visited}",
            f"Time: {result.elapsed_ms:.2f}ms",
        ]:
            r_text = font_small.render(text, True, colors['dark_gray'])
            panel_surface.blit(r_text, (20, y_offset))
            y_offset += 20

    # slider
    speed_label = font_medium.render(f"Speed: {speed}", True, colors['black'])
    panel_surface.blit(speed_label, (20, slider_rect.y - 25))
    pygame.draw.rect(panel_surface, colors['light_gray'],
                     (slider_rect.x - window_size, slider_rect.y,
                      slider_rect.width, slider_rect.height))
    pygame.draw.rect(panel_surface, colors['blue'],
                     (slider_handle.x - window_size, slider_handle.y,
                      slider_handle.width, slider_handle.height))

    # buttons
    for btn_data in buttons.values():
        btn_color = btn_data['color'] if btn_data['enabled'] else colors['gray']
        btn_rect_local = pygame.Rect(
            btn_data['rect'].x - window_size, btn_data['rect'].y,
            btn_data['rect'].width, btn_data['rect'].height
        )
        pygame.draw.rect(panel_surface, btn_color, btn_rect_local)
        pygame.draw.rect(panel_surface, colors['dark_gray'], btn_rect_local, 2)
        btn_text = font_medium.render(btn_data['text'], True,
                                      colors['black'] if btn_data['enabled'] else colors['gray'])
        panel_surface.blit(btn_text, btn_text.get_rect(center=btn_rect_local.center))

    # legend
    legend_y = max(y_offset + 20, 540)
    panel_surface.blit(font_medium.render("Legend:", True, colors['black']), (20, legend_y))
    legend_y += 25
    legend_items = [
        ("Start", colors['green']),
        ("End", colors['red']),
        ("Wall", colors['black']),
        ("Visited", colors['visited']),
        ("Frontier", colors['frontier']),
        ("Path", colors['path']),
    ]
    for text, color in legend_items:
        pygame.draw.rect(panel_surface, color, (20, legend_y + 2, 12, 12))
        panel_surface.blit(font_small.render(text, True, colors['dark_gray']), (40, legend_y))
        legend_y += 18

    # controls
    controls_y = legend_y + 15
    panel_surface.blit(font_medium.render("Controls:", True, colors['black']), (20, controls_y))
    controls_y += 25
    for text in ["1-8: Select algorithm", "S: Start   SPACE: Pause/Resume",
                 "R: Reset   C: Clear walls", "W: Random walls   D: Diagonal",
                 "Mouse: draw walls, drag start/end"]:
        panel_surface.blit(font_small.render(text, True, colors['dark_gray']), (20, controls_y))
        controls_y += 18

    return panel_surface

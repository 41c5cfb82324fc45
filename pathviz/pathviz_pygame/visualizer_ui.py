import pygame

from ..pathviz_engine.constants import DEFAULT_SPEED, MIN_SPEED, MAX_SPEED


class UIState:
    def __init__(self, window_size, panel_width, speed=DEFAULT_SPEED):
        self.window_size = window_size
        self.panel_width = panel_width
        self.buttons = {}
        self.slider_rect = pygame.Rect(window_size + 20, 330, 200, 20)
        self.slider_handle = pygame.Rect(window_size + 20, 325, 10, 30)
        self.speed = speed
        self.dragging_slider = False
        set_slider_speed(self, speed)


def setup_ui_elements(ui, colors):
    button_width = 120
    button_height = 30
    start_x = ui.window_size + 20
    start_y = 370
    button_configs = [
        ('start', 'Start', start_y),
        ('pause', 'Pause', start_y + 40),
        ('reset', 'Reset', start_y + 80),
        ('walls', 'Random Walls', start_y + 120),
    ]
    for btn_id, text, y_pos in button_configs:
        ui.buttons[btn_id] = {
            'rect': pygame.Rect(start_x, y_pos, button_width, button_height),
            'text': text,
            'enabled': btn_id != 'pause',
            'color': colors['button_normal'],
        }


def handle_mouse_hover(ui, colors, pos):
    for btn_data in ui.buttons.values():
        if btn_data['rect'].collidepoint(pos) and btn_data['enabled']:
            btn_data['color'] = colors['button_hover']
        else:
            btn_data['color'] = colors['button_normal']


def set_running_buttons(ui, running, paused=False):
    ui.buttons['start']['enabled'] = not running
    ui.buttons['walls']['enabled'] = not running
    ui.buttons['pause']['enabled'] = running
    ui.buttons['pause']['text'] = 'Resume' if paused else 'Pause'


def set_slider_speed(ui, speed):
    speed = max(MIN_SPEED, min(MAX_SPEED, int(speed)))
    fraction = (speed - MIN_SPEED) / (MAX_SPEED - MIN_SPEED)
    ui.slider_handle.x = ui.slider_rect.x + int(round(fraction * ui.slider_rect.width)) - 5
    ui.speed = speed
    return speed


def update_slider(ui, mouse_x):
    """Move the handle under the mouse and return the new speed (1-200)."""
    relative_x = mouse_x - ui.slider_rect.x
    relative_x = max(0, min(relative_x, ui.slider_rect.width))
    ui.slider_handle.x = ui.slider_rect.x + relative_x - 5
    ui.speed = MIN_SPEED + int(round(relative_x / ui.slider_rect.width * (MAX_SPEED - MIN_SPEED)))
    return ui.speed


def cell_at(pos, cell_size, rows, cols):
    """Grid cell under a pixel position, or None outside the grid."""
    x, y = pos
    if x < 0 or y < 0:
        return None
    r, c = y // cell_size, x // cell_size
    if r >= rows or c >= cols:
        return None
    return (r, c)

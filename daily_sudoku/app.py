import logging

import pygame

from . import config
from .game import Direction
from .rules import format_time

logger = logging.getLogger(__name__)

TICK_EVENT = pygame.USEREVENT + 1


# =========================================================================
# PYGAME FRONT-END
# Draws today's puzzle and routes mouse/keyboard input into the game.
# =========================================================================
class SudokuApp:
    def __init__(self, session):
        self.session = session
        self.game = session.game

        self.WINDOW_WIDTH = config.WINDOW_WIDTH
        self.WINDOW_HEIGHT = config.WINDOW_HEIGHT

        # Color Palette
        self.BG_COLOR = (245, 247, 250)
        self.GRID_BG = (255, 255, 255)
        self.BLACK = (30, 30, 30)
        self.GRAY = (180, 190, 200)
        self.PRIMARY = (79, 70, 229)
        self.PRIMARY_LIGHT = (129, 140, 248)
        self.PRIMARY_DARK = (55, 48, 163)
        self.SUCCESS = (34, 197, 94)
        self.ERROR = (239, 68, 68)
        self.WARNING = (251, 191, 36)
        self.SELECTION = (224, 231, 255)
        self.SELECTION_BORDER = (129, 140, 248)
        self.TEXT_GRAY = (100, 116, 139)
        self.SUBGRID_LINE = (203, 213, 225)
        self.CONFLICT_HIGHLIGHT = (255, 100, 100)
        self.CONFLICT_BORDER = (200, 50, 50)
        self.DIFFICULTY_COLORS = {
            'easy': self.SUCCESS,
            'medium': self.WARNING,
            'hard': self.ERROR,
        }

        # Grid positioning
        self.GRID_SIZE = config.GRID_SIZE
        self.CELL_SIZE = self.GRID_SIZE // 9
        self.GRID_X = config.GRID_X
        self.GRID_Y = config.GRID_Y
        self.PANEL_X = self.GRID_X + self.GRID_SIZE + 20
        self.PANEL_WIDTH = 260

        # Key Mapping for Numpad support
        self.key_mapping = {
            pygame.K_1: 1, pygame.K_2: 2, pygame.K_3: 3, pygame.K_4: 4, pygame.K_5: 5,
            pygame.K_6: 6, pygame.K_7: 7, pygame.K_8: 8, pygame.K_9: 9,
            pygame.K_KP1: 1, pygame.K_KP2: 2, pygame.K_KP3: 3, pygame.K_KP4: 4, pygame.K_KP5: 5,
            pygame.K_KP6: 6, pygame.K_KP7: 7, pygame.K_KP8: 8, pygame.K_KP9: 9
        }
        self.arrow_mapping = {
            pygame.K_UP: Direction.UP,
            pygame.K_DOWN: Direction.DOWN,
            pygame.K_LEFT: Direction.LEFT,
            pygame.K_RIGHT: Direction.RIGHT,
        }

        self.screen = None
        self.show_stats = False
        self.ticking = False

    # -------------------------------------------------------------------------
    # TIMER
    # -------------------------------------------------------------------------
    def set_ticking(self, on):
        pygame.time.set_timer(TICK_EVENT, config.TICK_INTERVAL_MS if on else 0)
        self.ticking = on

    def sync_timer(self):
        """Arms the tick while the game is in progress and disarms it otherwise."""
        should_tick = self.game is not None and self.game.in_progress
        if should_tick == self.ticking:
            return
        self.set_ticking(should_tick)
        if not should_tick and self.game is not None and self.game.state.is_completed:
            self.show_stats = True

    # -------------------------------------------------------------------------
    # LAYOUT
    # -------------------------------------------------------------------------
    def play_button_rect(self):
        return pygame.Rect(self.PANEL_X, 70, self.PANEL_WIDTH, 45)

    def stats_button_rect(self):
        return pygame.Rect(self.WINDOW_WIDTH - 120, 20, 100, 35)

    def number_pad_rects(self):
        """Maps each pad entry (1..9, or 0 for Clear) to its rect."""
        size, gap = 80, 10
        top = self.GRID_Y
        rects = {}
        for num in range(1, 10):
            i = num - 1
            rects[num] = pygame.Rect(self.PANEL_X + (i % 3) * (size + gap),
                                     top + (i // 3) * (size + gap), size, size)
        rects[0] = pygame.Rect(self.PANEL_X, top + 3 * (size + gap), self.PANEL_WIDTH, 45)
        return rects

    def hint_button_rect(self):
        return pygame.Rect(self.PANEL_X, self.GRID_Y + 3 * 90 + 55, self.PANEL_WIDTH, 45)

    def cell_at(self, pos):
        x, y = pos
        if (self.GRID_X <= x < self.GRID_X + self.CELL_SIZE * 9 and
                self.GRID_Y <= y < self.GRID_Y + self.CELL_SIZE * 9):
            return (y - self.GRID_Y) // self.CELL_SIZE, (x - self.GRID_X) // self.CELL_SIZE
        return None

    # -------------------------------------------------------------------------
    # INPUT
    # -------------------------------------------------------------------------
    def handle_event(self, event):
        """Routes one pygame event; returns False when the app should quit."""
        if event.type == pygame.QUIT:
            return False
        if event.type == TICK_EVENT:
            if self.game is not None:
                self.game.tick()
        elif event.type == pygame.MOUSEBUTTONDOWN:
            self.handle_click(event.pos)
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE and not self.show_stats:
                return False
            self.handle_key(event.key)
        self.sync_timer()
        return True

    def handle_click(self, pos):
        if self.stats_button_rect().collidepoint(pos):
            self.show_stats = not self.show_stats
            return
        if self.show_stats:
            self.show_stats = False
            return
        if self.game is None:
            return

        if not self.game.state.has_started and self.play_button_rect().collidepoint(pos):
            self.game.start()
            return

        cell = self.cell_at(pos)
        if cell is not None:
            self.game.select_cell(*cell)
            return

        for num, rect in self.number_pad_rects().items():
            if rect.collidepoint(pos):
                if num == 0:
                    self.game.clear_cell()
                else:
                    self.game.enter_digit(num)
                return

        if self.hint_button_rect().collidepoint(pos):
            self.game.hint()

    def handle_key(self, key):
        if key == pygame.K_s:
            self.show_stats = not self.show_stats
            return
        if self.show_stats:
            if key in (pygame.K_ESCAPE, pygame.K_RETURN, pygame.K_SPACE):
                self.show_stats = False
            return
        if self.game is None:
            return

        num = self.key_mapping.get(key)
        if key in (pygame.K_SPACE, pygame.K_RETURN):
            self.game.start()
        elif num is not None:
            self.game.enter_digit(num)
        elif key in (pygame.K_DELETE, pygame.K_BACKSPACE, pygame.K_0, pygame.K_KP0):
            self.game.clear_cell()
        elif key in self.arrow_mapping:
            self.game.move_selection(self.arrow_mapping[key])
        elif key == pygame.K_h:
            self.game.hint()

    # -------------------------------------------------------------------------
    # DRAWING
    # -------------------------------------------------------------------------
    def draw_rounded_rect(self, surface, color, rect, radius=10):
        """Utility to draw a rectangle with rounded corners."""
        x, y, width, height = rect
        pygame.draw.rect(surface, color, (x + radius, y, width - 2 * radius, height))
        pygame.draw.rect(surface, color, (x, y + radius, width, height - 2 * radius))
        pygame.draw.circle(surface, color, (x + radius, y + radius), radius)
        pygame.draw.circle(surface, color, (x + width - radius, y + radius), radius)
        pygame.draw.circle(surface, color, (x + radius, y + height - radius), radius)
        pygame.draw.circle(surface, color, (x + width - radius, y + height - radius), radius)

    def draw_button(self, text, rect, color, text_color, font=None):
        """Draws a clickable button with a shadow effect."""
        x, y, width, height = rect
        self.draw_rounded_rect(self.screen, self.GRAY, (x + 2, y + 2, width, height), 8)
        self.draw_rounded_rect(self.screen, color, (x, y, width, height), 8)

        text_surface = (font or self.font_small).render(text, True, text_color)
        self.screen.blit(text_surface, text_surface.get_rect(center=(x + width // 2, y + height // 2)))

    def draw_stat_card(self, label, value, x, y, width, value_color=None):
        """Draws a statistic display card."""
        height = 50
        self.draw_rounded_rect(self.screen, self.GRID_BG, (x, y, width, height), 8)
        label_text = self.font_tiny.render(label, True, self.TEXT_GRAY)
        self.screen.blit(label_text, (x + 12, y + 10))
        value_text = self.font_medium.render(str(value), True, value_color or self.BLACK)
        self.screen.blit(value_text, (x + 12, y + 24))

    def draw_header(self):
        puzzle = self.session.puzzle
        title = self.font_title.render(f"Daily Sudoku #{puzzle.id}", True, self.PRIMARY_DARK)
        self.screen.blit(title, (self.GRID_X, 20))
        self.draw_button("Stats", self.stats_button_rect(), self.TEXT_GRAY, (255, 255, 255))

        state = self.game.state
        difficulty_color = self.DIFFICULTY_COLORS.get(puzzle.difficulty, self.TEXT_GRAY)
        self.draw_stat_card("LEVEL", puzzle.difficulty.upper(), self.GRID_X, 68, 140, difficulty_color)
        self.draw_stat_card("TIME", format_time(state.elapsed_time), self.GRID_X + 150, 68, 140)
        self.draw_stat_card("MISTAKES", state.mistakes, self.GRID_X + 300, 68, 150,
                            self.ERROR if state.mistakes else None)

        if not state.has_started:
            self.draw_button("Play", self.play_button_rect(), self.PRIMARY, (255, 255, 255), self.font_medium)
        elif state.is_completed:
            self.draw_button("Completed!", self.play_button_rect(), self.SUCCESS, (255, 255, 255), self.font_medium)

    def draw_grid(self):
        """Draws the main Sudoku grid lines."""
        self.draw_rounded_rect(self.screen, self.GRID_BG,
                               (self.GRID_X, self.GRID_Y, self.GRID_SIZE, self.GRID_SIZE), 12)

        for i in range(10):
            thickness = 3 if i % 3 == 0 else 1
            color = self.BLACK if i % 3 == 0 else self.SUBGRID_LINE

            # Horizontal line
            pygame.draw.line(self.screen, color,
                             (self.GRID_X, self.GRID_Y + i * self.CELL_SIZE),
                             (self.GRID_X + self.GRID_SIZE, self.GRID_Y + i * self.CELL_SIZE), thickness)

            # Vertical line
            pygame.draw.line(self.screen, color,
                             (self.GRID_X + i * self.CELL_SIZE, self.GRID_Y),
                             (self.GRID_X + i * self.CELL_SIZE, self.GRID_Y + self.GRID_SIZE), thickness)

    def draw_conflict_highlights(self):
        """Highlights user entries that clash with another cell (Red)."""
        for (row, col) in self.game.invalid_cells:
            x = self.GRID_X + col * self.CELL_SIZE
            y = self.GRID_Y + row * self.CELL_SIZE
            conflict_surf = pygame.Surface((self.CELL_SIZE - 4, self.CELL_SIZE - 4))
            conflict_surf.set_alpha(80)
            conflict_surf.fill(self.CONFLICT_HIGHLIGHT)
            self.screen.blit(conflict_surf, (x + 2, y + 2))
            pygame.draw.rect(self.screen, self.CONFLICT_BORDER,
                             (x + 2, y + 2, self.CELL_SIZE - 4, self.CELL_SIZE - 4), 2)

    def draw_numbers(self):
        grid = self.game.state.current_grid
        clues = self.session.puzzle.puzzle
        for i in range(9):
            for j in range(9):
                if grid[i][j] == 0:
                    continue
                x = self.GRID_X + j * self.CELL_SIZE + self.CELL_SIZE // 2
                y = self.GRID_Y + i * self.CELL_SIZE + self.CELL_SIZE // 2

                if clues[i][j] != 0:
                    color = self.BLACK
                else:
                    color = self.ERROR if (i, j) in self.game.invalid_cells else self.PRIMARY

                text = self.font_large.render(str(grid[i][j]), True, color)
                self.screen.blit(text, text.get_rect(center=(x, y)))

    def draw_selection(self):
        """Highlights the selected cell with a cross-hair over its row and column."""
        selected = self.game.state.selected_cell
        if selected is None or not self.game.in_progress:
            return
        row, col = selected
        x = self.GRID_X + col * self.CELL_SIZE
        y = self.GRID_Y + row * self.CELL_SIZE

        highlight_surf = pygame.Surface((self.CELL_SIZE, self.CELL_SIZE))
        highlight_surf.set_alpha(30)
        highlight_surf.fill(self.PRIMARY_LIGHT)
        for i in range(9):
            self.screen.blit(highlight_surf, (self.GRID_X + i * self.CELL_SIZE, y))
            self.screen.blit(highlight_surf, (x, self.GRID_Y + i * self.CELL_SIZE))

        pygame.draw.rect(self.screen, self.SELECTION,
                         (x + 2, y + 2, self.CELL_SIZE - 4, self.CELL_SIZE - 4))
        pygame.draw.rect(self.screen, self.SELECTION_BORDER,
                         (x + 2, y + 2, self.CELL_SIZE - 4, self.CELL_SIZE - 4), 3)

    def draw_number_pad(self):
        enabled = self.game.in_progress
        color = self.PRIMARY if enabled else self.GRAY
        for num, rect in self.number_pad_rects().items():
            if num == 0:
                self.draw_button("Clear", rect, self.TEXT_GRAY if enabled else self.GRAY, (255, 255, 255))
            else:
                self.draw_button(str(num), rect, color, (255, 255, 255), self.font_large)
        self.draw_button("Hint", self.hint_button_rect(), self.SUCCESS if enabled else self.GRAY, (255, 255, 255))

    def draw_stats(self):
        """Statistics overlay."""
        overlay = pygame.Surface((self.WINDOW_WIDTH, self.WINDOW_HEIGHT))
        overlay.set_alpha(200)
        overlay.fill((20, 20, 30))
        self.screen.blit(overlay, (0, 0))

        width, height = 440, 400
        mx, my = (self.WINDOW_WIDTH - width) // 2, (self.WINDOW_HEIGHT - height) // 2
        self.draw_rounded_rect(self.screen, self.GRID_BG, (mx, my, width, height), 16)

        title = self.font_title.render("Statistics", True, self.PRIMARY_DARK)
        self.screen.blit(title, title.get_rect(center=(self.WINDOW_WIDTH // 2, my + 40)))

        stats = self.session.load_stats()
        cards = [
            ("PLAYED", stats.games_played),
            ("COMPLETED", stats.games_completed),
            ("CURRENT STREAK", stats.current_streak),
            ("MAX STREAK", stats.max_streak),
            ("AVERAGE", format_time(stats.average_time)),
            ("FASTEST", format_time(stats.fastest_time)),
            ("SLOWEST", format_time(stats.slowest_time)),
            ("RATE", f"{stats.completion_rate:.0f}%"),
        ]
        for i, (label, value) in enumerate(cards):
            x = mx + 20 + (i % 2) * 205
            y = my + 80 + (i // 2) * 60
            self.draw_stat_card(label, value, x, y, 195)

        hint = self.font_small.render("Press S or click to close", True, self.TEXT_GRAY)
        self.screen.blit(hint, hint.get_rect(center=(self.WINDOW_WIDTH // 2, my + height - 25)))

    def draw_unavailable(self):
        title = self.font_large.render("No puzzle available yet!", True, self.PRIMARY_DARK)
        self.screen.blit(title, title.get_rect(center=(self.WINDOW_WIDTH // 2, self.WINDOW_HEIGHT // 2 - 20)))
        sub = self.font_small.render("Check back tomorrow for a new sudoku.", True, self.TEXT_GRAY)
        self.screen.blit(sub, sub.get_rect(center=(self.WINDOW_WIDTH // 2, self.WINDOW_HEIGHT // 2 + 20)))
        self.draw_button("Stats", self.stats_button_rect(), self.TEXT_GRAY, (255, 255, 255))

    def draw(self):
        self.screen.fill(self.BG_COLOR)
        if self.game is None:
            self.draw_unavailable()
        else:
            self.draw_header()
            self.draw_grid()
            self.draw_conflict_highlights()
            self.draw_selection()
            self.draw_numbers()
            self.draw_number_pad()
        if self.show_stats:
            self.draw_stats()

    # -------------------------------------------------------------------------
    # MAIN LOOP
    # -------------------------------------------------------------------------
    def init_display(self):
        pygame.init()
        self.screen = pygame.display.set_mode((self.WINDOW_WIDTH, self.WINDOW_HEIGHT))
        pygame.display.set_caption("Daily Sudoku")

        self.font_title = pygame.font.Font(None, 48)
        self.font_large = pygame.font.Font(None, 42)
        self.font_medium = pygame.font.Font(None, 32)
        self.font_small = pygame.font.Font(None, 22)
        self.font_tiny = pygame.font.Font(None, 18)

    def run(self):
        """Main game loop."""
        self.init_display()
        clock = pygame.time.Clock()
        running = True
        # A restored in-progress game resumes its clock straight away
        self.sync_timer()

        try:
            while running:
                for event in pygame.event.get():
                    if not self.handle_event(event):
                        running = False
                        break

                self.draw()
                pygame.display.flip()
                clock.tick(config.FPS)
        finally:
            if self.ticking:
                self.set_ticking(False)
            pygame.quit()

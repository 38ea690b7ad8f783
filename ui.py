import math
import sys

import pygame

from physics import DEFAULT_CONSTANTS


class UI:
    def __init__(self, width=1100, height=700, constants=DEFAULT_CONSTANTS):
        self.constants = constants
        self.width = width
        self.height = height
        self.screen = None
        self.clock = None
        self.font = None
        self.small_font = None

        # Layout: left panel (240px) | top-down view of the x-z plane
        self.left_panel_width = 240
        self.viz_left = self.left_panel_width
        self.view_extent = 70.0     # scene units from centre to view edge

        # Host-side controls
        self.paused = False
        self.time_scale = 1.0
        self.time_scale_step = 0.1

        # Colors
        self.sky_color = (10, 16, 32)
        self.planet_color = (34, 51, 255)
        self.atmosphere_color = (135, 206, 235)
        self.panel_bg = (20, 25, 40)
        self.panel_border = (60, 70, 100)
        self.text_color = (220, 220, 220)
        self.header_color = (100, 180, 255)
        self.value_color = (180, 255, 180)

        # Trails keyed by meteor id
        self.trails = {}

    def display_intro(self):
        print("=== Meteor Fall Simulator ===")
        print("[M] spawn a meteor, [C] clear, [Space/P] pause, [+/-] time scale, [Esc] quit.\n")

    def init_scene(self):
        pygame.init()
        pygame.display.set_caption("Meteor Fall Simulator")
        self.screen = pygame.display.set_mode((self.width, self.height))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("consolas", 16)
        self.small_font = pygame.font.SysFont("consolas", 13)
        self.trails.clear()

    def handle_events(self):
        """Returns a list of host commands: 'quit', 'spawn', 'clear'."""
        commands = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                commands.append("quit")
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    commands.append("quit")
                elif event.key in (pygame.K_SPACE, pygame.K_p):
                    self.paused = not self.paused
                elif event.key == pygame.K_m:
                    commands.append("spawn")
                elif event.key == pygame.K_c:
                    commands.append("clear")
                    self.trails.clear()
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    self.adjust_time_scale(+self.time_scale_step)
                elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                    self.adjust_time_scale(-self.time_scale_step)
        return commands

    def adjust_time_scale(self, delta):
        lo, hi = self.constants.min_time_scale, self.constants.max_time_scale
        self.time_scale = round(min(hi, max(lo, self.time_scale + delta)), 2)

    def world_to_screen(self, position):
        # Top-down: scene x -> screen x, scene z -> screen y
        viz_width = self.width - self.viz_left
        cx = self.viz_left + viz_width // 2
        cy = self.height // 2
        px_per_unit = min(viz_width, self.height) / (2.0 * self.view_extent)
        return int(cx + position[0] * px_per_unit), int(cy + position[2] * px_per_unit), px_per_unit

    def burn_to_color(self, intensity):
        # Cool grey rock -> orange -> white-hot
        x = max(0.0, min(1.0, intensity))
        r = int(150 + 105 * x)
        g = int(140 + 80 * x * x)
        b = int(130 - 80 * x + 170 * x ** 4)
        return (r, g, min(255, b))

    def format_scientific(self, value, precision=2):
        """Format a number in scientific notation for display."""
        if value == 0 or value == float('inf') or math.isnan(value):
            return "0"
        exp = int(math.floor(math.log10(abs(value))))
        if abs(exp) <= 3:
            return f"{value:.{precision}f}"
        mantissa = value / (10 ** exp)
        return f"{mantissa:.{precision}f}e{exp}"

    def draw_panel_background(self, x, y, width, height, title=None):
        """Draw a panel with background and optional title."""
        pygame.draw.rect(self.screen, self.panel_bg, pygame.Rect(x, y, width, height))
        pygame.draw.rect(self.screen, self.panel_border, pygame.Rect(x, y, width, height), 1)
        if title:
            surf = self.font.render(title, True, self.header_color)
            self.screen.blit(surf, (x + 8, y + 5))
            pygame.draw.line(self.screen, self.panel_border,
                             (x + 5, y + 24), (x + width - 5, y + 24), 1)
            return y + 30
        return y + 5

    def update_display(self, sim):
        self.screen.fill(self.sky_color)
        c = sim.constants

        # Planet and atmosphere shell
        cx, cy, scale = self.world_to_screen((0.0, 0.0, 0.0))
        pygame.draw.circle(self.screen, self.atmosphere_color, (cx, cy),
                           int((c.primary_radius + c.atmosphere_height) * scale), 1)
        pygame.draw.circle(self.screen, self.planet_color, (cx, cy), int(c.primary_radius * scale))

        # Meteors and their trails
        live_ids = set()
        for meteor in sim.meteors:
            live_ids.add(meteor.meteor_id)
            x, y, scale = self.world_to_screen(meteor.position)
            trail = self.trails.setdefault(meteor.meteor_id, [])
            trail.append((x, y))
            if len(trail) > 100:
                trail.pop(0)
            if len(trail) > 1:
                pygame.draw.lines(self.screen, (255, 0, 0), False, trail, 1)
            radius_px = max(2, int(meteor.size * scale))
            pygame.draw.circle(self.screen, self.burn_to_color(meteor.burn_intensity), (x, y), radius_px)
        for stale in set(self.trails) - live_ids:
            del self.trails[stale]

        self.draw_hud(sim)
        if self.paused:
            self.draw_pause_indicator()
        self.draw_controls_hint()

    def draw_hud(self, sim):
        panel_y = self.draw_panel_background(0, 0, self.left_panel_width, self.height, "Simulation")
        stats = sim.stats
        lines = [
            f"Time: {sim.elapsed:7.2f} s",
            f"Speed: x{self.time_scale:.1f}",
            f"Meteors: {sim.active_count}",
            f"Impacts: {stats.count}",
            f"Energy: {self.format_scientific(stats.total_energy)} J",
            f"Largest: {self.format_scientific(stats.largest_energy)} J",
        ]

        # Local atmosphere of the first meteor, if inside the envelope
        if sim.meteors:
            meteor = sim.meteors[0]
            sample = sim.atmosphere_at(meteor.distance)
            lines += [
                "",
                f"Meteor {meteor.meteor_id}",
                f"Alt: {sample.altitude_m / 1000:.1f} km",
                f"Layer: {sample.layer}",
                f"Vel: {meteor.speed(sim.constants.scene_scale):.0f} m/s",
                f"Gravity: {sim.gravity.field_strength(meteor.distance):.2f} m/s^2",
                f"Density: {sample.density:.6f}",
                f"Pressure: {sample.pressure:.0f} Pa",
                f"Temp: {sample.temperature:.0f} K",
                f"Burn: {meteor.burn_intensity * 100:.0f}%",
            ]

        for i, line in enumerate(lines):
            surf = self.small_font.render(line, True, self.text_color)
            self.screen.blit(surf, (8, panel_y + 16 * i))

    def draw_pause_indicator(self):
        viz_center_x = (self.viz_left + self.width) // 2
        overlay = pygame.Surface((200, 40), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 160))
        self.screen.blit(overlay, (viz_center_x - 100, 20))
        surf = self.font.render("PAUSED", True, (255, 255, 255))
        self.screen.blit(surf, surf.get_rect(center=(viz_center_x, 40)))

    def draw_controls_hint(self):
        hint_text = "[M] Spawn  |  [C] Clear  |  [Space/P] Pause  |  [+/-] Speed  |  [Esc] Quit"
        surf = self.small_font.render(hint_text, True, (150, 150, 150))
        self.screen.blit(surf, (self.viz_left + 10, self.height - 25))

    def flip(self):
        pygame.display.flip()
        self.clock.tick(60)

    def shutdown(self):
        pygame.quit()
        sys.exit()

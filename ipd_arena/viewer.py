"""pygame window onto a running Simulation. Draws snapshots only, never touches simulation state."""

import pygame

from .strategies import STRATEGY_ORDER, Strategy, short_name

FPS = 60
BACKGROUND = (26, 26, 46)
FOOD_COLOR = (250, 250, 250)
BAR_BACK = (5, 5, 5)
GREEN = (51, 187, 85)
YELLOW = (250, 200, 10)
RED = (255, 85, 85)
STRATEGY_COLORS = {
    Strategy.TIT_FOR_TAT: (0, 0, 255),
    Strategy.ALWAYS_COOPERATE: (255, 192, 203),
    Strategy.ALWAYS_DEFECT: (128, 0, 128),
    Strategy.RANDOM: (255, 255, 0),
    Strategy.TIT_FOR_TWO_TATS: (148, 80, 211),
    Strategy.WIN_STAY_LOSE_SHIFT: (255, 215, 0),
    Strategy.GRIM_TRIGGER: (255, 140, 0),
}
FOOD_RADIUS = 5


def health_color(fraction):
    if fraction > 0.6:
        return GREEN
    if fraction > 0.3:
        return YELLOW
    return RED


def draw_world(surface, snapshot, config):
    """Draws food and agents of `snapshot` onto `surface`, scaled from world to surface size."""
    width, height = surface.get_size()
    sx = width / config.world_width
    sy = height / config.world_height
    radius = max(2, int(config.creature_radius * min(sx, sy)))
    surface.fill(BACKGROUND)
    for item in snapshot.food:
        pygame.draw.circle(surface, FOOD_COLOR, (int(item.posx * sx), int(item.posy * sy)), FOOD_RADIUS)
    for agent in snapshot.agents:
        center = (int(agent.posx * sx), int(agent.posy * sy))
        pygame.draw.circle(surface, STRATEGY_COLORS[agent.strategy], center, radius)
        #resource bar above the creature, full at the reproduction threshold
        fraction = max(0.0, min(1.0, agent.resources / config.reproduction_threshold))
        bar = pygame.Rect(center[0] - radius, center[1] - radius - 8, 2 * radius, 4)
        pygame.draw.rect(surface, BAR_BACK, bar)
        bar.width = int(2 * radius * fraction)
        pygame.draw.rect(surface, health_color(fraction), bar)
    return surface


def legend_lines(snapshot):
    stats = snapshot.stats
    if stats is None:
        return [f"Creatures: {len(snapshot.agents)}"]
    lines = [f"Creatures: {stats.population}  Food: {stats.food_available}  t={stats.time:.0f}s"]
    for strategy in STRATEGY_ORDER:
        n = stats.strategy_counts.get(strategy, 0)
        if n:
            lines.append(f"{short_name(strategy)}: {n}")
    lines.append(f"Cooperation: {stats.cooperation_rate:.0%}  Generations: {stats.generation_count}")
    return lines


def run_viewer(sim, fps=FPS, width=None, height=None):
    """Interactive loop: the frame clock supplies dt. Space pauses, R resets the run, Esc quits."""
    pygame.init()
    size = (int(width or sim.config.world_width), int(height or sim.config.world_height))
    screen = pygame.display.set_mode(size, pygame.RESIZABLE)
    pygame.display.set_caption("Prisoner's Dilemma Arena")
    font = pygame.font.SysFont('monospace', 18)
    clock = pygame.time.Clock()
    paused = False
    running = True
    while running:
        dt = clock.tick(fps) / 1000.0
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    paused = not paused
                elif event.key == pygame.K_r:
                    sim.reset()
        if not paused:
            sim.tick(dt)
        snapshot = sim.snapshot()
        draw_world(screen, snapshot, sim.config)
        for i, line in enumerate(legend_lines(snapshot)):
            screen.blit(font.render(line, True, FOOD_COLOR), (10, 10 + 22 * i))
        pygame.display.flip()
    pygame.quit()

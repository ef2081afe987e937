class FoodItem:
    def __init__(self, id, posx, posy, value, ttl):
        self.id = id
        self.posx = posx
        self.posy = posy
        self.value = value
        self.ttl = ttl #seconds left before it rots


class FoodField:
    """Owns the live food items: spawning at a fixed rate, expiry and consumption."""

    def __init__(self, config, rng):
        self.config = config
        self.rng = rng
        self.items = []
        self.next_id = 0
        self.spawn_budget = 0.0 #fractional items carried over between ticks
        self.eaten = 0
        self.expired = 0

    def __len__(self):
        return len(self.items)

    def spawn(self, posx=None, posy=None, value=None):
        cfg = self.config
        if posx is None:
            posx = self.rng.uniform(cfg.food_margin, cfg.world_width - cfg.food_margin)
        if posy is None:
            posy = self.rng.uniform(cfg.food_margin, cfg.world_height - cfg.food_margin)
        item = FoodItem(self.next_id, posx, posy, cfg.food_value if value is None else value, cfg.food_ttl)
        self.next_id += 1
        self.items.append(item)
        return item

    def update(self, dt):
        """Ages every item, drops the rotten ones, then spawns food_spawn_rate*dt new items
        (the fractional part accumulates, so the rate holds under any frame timing)."""
        for item in self.items:
            item.ttl -= dt
        fresh = [item for item in self.items if item.ttl > 0]
        self.expired += len(self.items) - len(fresh)
        self.items = fresh

        self.spawn_budget += self.config.food_spawn_rate * dt
        while self.spawn_budget >= 1.0:
            self.spawn_budget -= 1.0
            self.spawn()

    def consume(self, agents):
        """Food outer, agents inner: the first agent close enough gets the whole item.
        Returns the number of items eaten."""
        reach = self.config.creature_radius + self.config.pickup_radius
        remaining = []
        eaten = 0
        for item in self.items:
            eater = None
            for agent in agents:
                if agent.alive and agent.distance_to(item.posx, item.posy) < reach:
                    eater = agent
                    break
            if eater is None:
                remaining.append(item)
                continue
            eater.resources += item.value
            eaten += 1
        self.items = remaining
        self.eaten += eaten
        return eaten

    def nearest(self, posx, posy, max_range):
        """Nearest item strictly within max_range of (posx, posy), or None."""
        best = None
        best_distance = max_range
        for item in self.items:
            dx = item.posx - posx
            dy = item.posy - posy
            d = (dx * dx + dy * dy) ** 0.5
            if d < best_distance:
                best = item
                best_distance = d
        return best

"""Headless driver: runs a Simulation, prints turn statistics and keeps the dead agents log."""

from .simulation import Simulation
from .strategies import short_name

PRINT_INTERVAL = 100 #print out tick statistics every nth tick
LOG_INTERVAL = 500 #if log_to_file, append to log every nth tick
LOGFILE_PATH = "/tmp/ipd_arena_dead_agents.txt"


def format_stats(stats):
    counts = " ".join(f"{short_name(s)}={n}" for s, n in stats.strategy_counts.items() if n)
    return (f"tick {stats.tick} (t={stats.time:.1f}s): pop={stats.population} [{counts}] "
            f"births={stats.births} deaths={stats.deaths} encounters={stats.encounters} "
            f"food={stats.food_available} avgR={stats.avg_resources:.1f} avgAge={stats.avg_age:.1f} "
            f"avgScore={stats.avg_score:.1f} coop={stats.cooperation_rate:.2%}")


def pretty_print_agent(agent):
    """Prepares string for pretty-printing an entry from dead_agents to either console or logfile."""
    lines = []
    lines.append(f"ID {agent['id']} ({agent['strategy']}): born {agent['born']:.2f}, died {agent['died']:.2f} "
                 f"at ({agent['posx']:.1f}, {agent['posy']:.1f}), aged {agent['died'] - agent['born']:.2f}, "
                 f"cause: {agent['cause']}")
    avg_score = agent['score'] / agent['interactions'] if agent['interactions'] else 0.0
    lines.append(f"  parent: {agent['parent']}, offspring: {len(agent['offspring'])} {agent['offspring']}, "
                 f"games played: {agent['interactions']}, cooperated: {agent['cooperations']} "
                 f"({agent['cooperation_rate']:.0%}), "
                 f"avg score: {avg_score:.2f}")
    lines.append("-" * 50)
    return "\n".join(lines)


def write_agent_to_log(agent, file_path):
    with open(file_path, 'a') as f:
        f.write(pretty_print_agent(agent) + "\n")


def log_dead_agents(dead_agents, file_path, logged=0, clear_list=True):
    """Appends the entries of dead_agents from index `logged` on, returns the new mark (0 once the list is cleared).
    The mark is a list position: death times repeat when a tick has dt 0."""
    new_agents = dead_agents[logged:]
    for agent in new_agents:
        write_agent_to_log(agent, file_path)

    if clear_list:
        dead_agents.clear()
        return 0
    return len(dead_agents)


def summarize(history):
    if not history:
        return {"ticks": 0, "final_pop": 0, "peak_pop": 0, "avg_pop": 0.0, "total_births": 0,
                "total_deaths": 0, "total_encounters": 0, "final_coop": 0.0, "final_counts": {}}
    last = history[-1]
    return {
        "ticks": len(history),
        "final_pop": last.population,
        "peak_pop": max(s.population for s in history),
        "avg_pop": sum(s.population for s in history) / len(history),
        "total_births": sum(s.births for s in history),
        "total_deaths": sum(s.deaths for s in history),
        "total_encounters": sum(s.encounters for s in history),
        "final_coop": last.cooperation_rate,
        "final_counts": {short_name(s): n for s, n in last.strategy_counts.items()},
    }


def summary_lines(summary):
    lines = ["summary:"]
    lines.append(f"  ticks={summary['ticks']} final_pop={summary['final_pop']} peak_pop={summary['peak_pop']} "
                 f"avg_pop={summary['avg_pop']:.1f}")
    lines.append(f"  total_births={summary['total_births']} total_deaths={summary['total_deaths']} "
                 f"encounters={summary['total_encounters']} final_coop={summary['final_coop']:.2%}")
    counts = ", ".join(f"{name}: {n}" for name, n in summary['final_counts'].items())
    lines.append(f"  final population by strategy: {counts}")
    return lines


def log_simulation_stats(summary, file_path):
    with open(file_path, 'a') as f:
        f.write("\n".join(summary_lines(summary) + ["-" * 50]) + "\n")


def run_simulation(config, steps, dt=1 / 60, seed=None, print_interval=PRINT_INTERVAL,
                   log_to_file=False, logfile_path=LOGFILE_PATH, log_interval=LOG_INTERVAL,
                   print_summary=True, stop_on_extinction=True):
    sim = Simulation(config, seed=seed)
    if not config.enabled_strategies:
        print("Warning: no strategies enabled, the arena stays empty")
    history = []
    logged = 0
    for _ in range(steps):
        stats = sim.tick(dt)
        history.append(stats)
        if print_interval and stats.tick % print_interval == 0:
            print(format_stats(stats))
        if log_to_file and stats.tick % log_interval == 0:
            logged = log_dead_agents(sim.population.dead_agents, logfile_path, logged)
        if stop_on_extinction and sim.extinct:
            print(f"tick {stats.tick}: population extinct")
            break
    summary = summarize(history)
    if log_to_file:
        log_dead_agents(sim.population.dead_agents, logfile_path, logged)
        log_simulation_stats(summary, logfile_path)
    if print_summary:
        print("\n".join(summary_lines(summary)))
    return sim, history

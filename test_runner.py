import pytest

from ipd_arena.agents import Agent
from ipd_arena.config import SimulationConfig
from ipd_arena.main import build_parser, main
from ipd_arena.population import agent_snapshot
from ipd_arena.runner import log_dead_agents, pretty_print_agent, run_simulation, summarize
from ipd_arena.simulation import Simulation
from ipd_arena.strategies import Strategy


@pytest.fixture
def doomed_config():
    """Upkeep so high that every founder starves on the first tick."""
    return SimulationConfig(enabled_strategies=("ALLC", "ALLD"), initial_per_strategy=2,
                            maintenance_cost=1000.0, food_spawn_rate=0.0)


def dead_entry(rng, id, died):
    agent = Agent(id, Strategy.TIT_FOR_TAT, 10.0, 20.0, rng)
    agent.interactions, agent.cooperations, agent.score = 4, 3, 10.0
    return agent_snapshot(agent, died, "starvation")


def test_run_until_extinct_with_log(doomed_config, tmp_path, capsys):
    logfile = tmp_path / "dead.txt"
    sim, history = run_simulation(doomed_config, steps=50, dt=0.1, seed=1, print_interval=1,
                                  log_to_file=True, logfile_path=str(logfile))
    out = capsys.readouterr().out
    assert "tick 1: population extinct" in out
    assert "summary:" in out
    assert len(history) == 1
    assert history[0].deaths_starvation == 4
    assert sim.extinct

    text = logfile.read_text()
    assert text.count("cause: starvation") == 4
    assert "summary:" in text
    assert sim.population.dead_agents == []


def test_warns_when_nothing_is_enabled(capsys):
    _, history = run_simulation(SimulationConfig(enabled_strategies=()), steps=5, dt=0.1,
                                print_interval=0, print_summary=False, stop_on_extinction=False)
    assert "Warning: no strategies enabled" in capsys.readouterr().out
    assert len(history) == 5


def test_summarize():
    assert summarize([])["ticks"] == 0

    sim, history = run_simulation(SimulationConfig(initial_per_strategy=3), steps=20, dt=0.05, seed=2,
                                  print_interval=0, print_summary=False)
    summary = summarize(history)
    assert summary["ticks"] == 20
    assert summary["final_pop"] == len(sim.agents)
    assert summary["peak_pop"] >= summary["final_pop"]
    assert sum(summary["final_counts"].values()) == summary["final_pop"]


def test_pretty_print_agent(rng):
    text = pretty_print_agent(dead_entry(rng, 7, 3.5))
    assert text.startswith("ID 7 (tit-for-tat): born 0.00, died 3.50")
    assert "cause: starvation" in text
    assert "cooperated: 3 (75%)" in text
    assert "avg score: 2.50" in text


def test_log_dead_agents_keeps_a_list_mark(rng, tmp_path):
    logfile = tmp_path / "dead.txt"
    dead = [dead_entry(rng, 1, 1.0), dead_entry(rng, 2, 2.0)]
    assert log_dead_agents(dead, str(logfile)) == 0
    assert dead == []

    dead = [dead_entry(rng, 3, 1.5), dead_entry(rng, 4, 3.0)]
    assert log_dead_agents(dead, str(logfile), 1, clear_list=False) == 2
    assert len(dead) == 2
    text = logfile.read_text()
    assert "ID 3 " not in text
    assert text.count("ID ") == 3


def test_deaths_at_the_same_time_are_all_logged(quiet_config, tmp_path):
    logfile = tmp_path / "dead.txt"
    sim = Simulation(quiet_config.with_changes(interaction_distance=50.0), seed=4)
    pop = sim.population
    pop.spawn(Strategy.TIT_FOR_TAT, 500, 500, resources=5)
    sucker = pop.spawn(Strategy.ALWAYS_COOPERATE, 100, 100, resources=11.5)
    pop.spawn(Strategy.ALWAYS_DEFECT, 110, 100)

    sim.tick(1.0)
    logged = log_dead_agents(pop.dead_agents, str(logfile))
    assert sucker.resources == pytest.approx(9.5)
    #a zero dt tick: the sucker starves at the same simulation time as the first death
    sim.tick(0.0)
    assert not sucker.alive
    log_dead_agents(pop.dead_agents, str(logfile), logged)
    text = logfile.read_text()
    assert text.count("ID ") == 2
    assert text.count("died 1.00") == 2


def test_cli_defaults():
    args = build_parser().parse_args([])
    assert args.strategies == ["ALLC", "ALLD", "TFT", "RAND"]
    assert not args.headless


def test_cli_headless_run(tmp_path, capsys):
    logfile = tmp_path / "cli.txt"
    main(["--headless", "--steps", "3", "--seed", "1", "--print-every", "1",
          "--strategies", "TFT", "WSLS", "--per-strategy", "2", "--log-file", str(logfile)])
    out = capsys.readouterr().out
    assert "tick 1 " in out and "tick 3 " in out
    assert "TFT=2" in out and "WSLS=2" in out
    assert "summary:" in logfile.read_text()

"""
End-to-end run of a bundled scenario through main.run_simulation
"""

from pathlib import Path

from main import run_simulation

SCENARIOS = Path(__file__).parent.parent / "scenarios"


def test_reversal_demo_scenario(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    ctx = run_simulation(
        sim_config_path=SCENARIOS / "simulation" / "reversal_demo.yaml",
        gc_config_path=SCENARIOS / "group_control" / "directional_cost.yaml",
        plot=False,
    )

    car = ctx.building.cars[0]
    assert car.floors_travelled == 4
    assert car.door_cycles == 3
    assert car.current_floor == 2
    assert ctx.building.is_quiescent()
    assert ctx.monitor.get_summary()['count'] == 3

    out = capsys.readouterr().out
    assert "Car_0: 4 floors travelled, 3 door cycles, now at floor 2 (IDLE)" in out
    assert (tmp_path / "simulation_log.jsonl").exists()

import simpy
import random
import sys
from dataclasses import dataclass

# Configuration
from config import (
    GroupControlConfig, SimulationConfig,
    load_group_control_config, load_simulation_config,
)

# Simulator components
from simulator.infrastructure.message_broker import MessageBroker
from simulator.infrastructure.realtime_env import RealtimeEnvironment
from simulator.core.building import Building
from simulator.traffic import HallCallGenerator

# Controller and allocation strategy
from controller.group_control import GroupControlSystem
from controller.algorithms import create_strategy

# Analyzer
from analyzer.realtime_monitor import RealtimePerformanceMonitor


@dataclass
class SimulationContext:
    """Everything one run is made of, owned by the top-level driver"""
    env: simpy.Environment
    broker: MessageBroker
    building: Building
    gcs: GroupControlSystem
    monitor: RealtimePerformanceMonitor
    traffic: HallCallGenerator


def setup_simulation(sim_config: SimulationConfig, gc_config: GroupControlConfig,
                     env: simpy.Environment = None, websocket_server=None) -> SimulationContext:
    """
    Build and start (but do not run) every process of a simulation.

    Args:
        sim_config: Building, car, door and traffic settings
        gc_config: Allocation strategy settings
        env: Environment to use; by default a RealtimeEnvironment when
             realtime_factor > 0, a plain simpy.Environment otherwise
        websocket_server: Optional VisualizerServer fed by the monitor
    """
    if sim_config.random_seed is not None:
        random.seed(sim_config.random_seed)
        print(f"Random seed fixed to {sim_config.random_seed} for reproducible results")
    else:
        print("Random seed not set - results will vary")

    if env is None:
        if sim_config.realtime_factor > 0:
            env = RealtimeEnvironment(speed_factor=sim_config.realtime_factor)
        else:
            env = simpy.Environment()

    broker = MessageBroker(env, verbose=sim_config.verbose)
    monitor = RealtimePerformanceMonitor(env, broker.get_broadcast_pipe(), websocket_server)
    monitor.set_simulation_metadata({
        'num_floors': sim_config.building.num_floors,
        'num_cars': sim_config.car.num_cars,
        'allocation_strategy': gc_config.allocation_strategy.name,
    })
    env.process(monitor.start_listening())

    building = Building(
        env, broker,
        num_floors=sim_config.building.num_floors,
        num_cars=sim_config.car.num_cars,
        travel_time=sim_config.car.travel_time_per_floor,
        door_open_time=sim_config.door.open_time,
        door_wait_time=sim_config.door.wait_time,
        door_close_time=sim_config.door.close_time,
    )

    strategy = create_strategy(
        gc_config.allocation_strategy.name,
        num_floors=sim_config.building.num_floors,
        parameters=gc_config.allocation_strategy.parameters,
    )
    gcs = GroupControlSystem("GCS", broker, strategy)
    for car in building.cars:
        gcs.register_car(car)
    env.process(gcs.run())

    traffic = HallCallGenerator(
        env, building,
        pattern=sim_config.traffic.pattern,
        call_rate=sim_config.traffic.call_rate,
        calls=sim_config.traffic.calls,
    )
    env.process(traffic.run())

    return SimulationContext(env, broker, building, gcs, monitor, traffic)


def run_simulation(sim_config_path="scenarios/simulation/office_random.yaml",
                   gc_config_path="scenarios/group_control/directional_cost.yaml",
                   plot=True):
    """
    Load configuration, run for the configured duration, report.
    """
    print("--- Loading Configuration ---")
    sim_config = load_simulation_config(sim_config_path)
    gc_config = load_group_control_config(gc_config_path)
    print(f"Simulation Config: {sim_config_path}")
    print(f"Group Control Config: {gc_config_path}")

    print("\n--- Simulation Setup ---")
    ctx = setup_simulation(sim_config, gc_config)

    print("\n--- Simulation Start ---")
    ctx.env.run(until=sim_config.traffic.simulation_duration)
    print("--- Simulation End ---")

    print(f"Hall button presses: {ctx.traffic.presses}, new calls: {ctx.traffic.new_calls}, "
          f"assignments: {ctx.gcs.assignment_count}")
    for car in ctx.building.cars:
        print(f"{car.name}: {car.floors_travelled} floors travelled, {car.door_cycles} door cycles, "
              f"now at floor {car.current_floor} ({car.state})")

    ctx.monitor.save_event_log('simulation_log.jsonl')
    ctx.monitor.print_summary()
    ctx.monitor.print_performance_summary()

    if plot:
        ctx.monitor.plot_trajectory_diagram()

    return ctx


def main():
    # Accept command line arguments for config files
    sim_config_path = sys.argv[1] if len(sys.argv) > 1 else "scenarios/simulation/office_random.yaml"
    gc_config_path = sys.argv[2] if len(sys.argv) > 2 else "scenarios/group_control/directional_cost.yaml"
    run_simulation(sim_config_path=sim_config_path, gc_config_path=gc_config_path)


if __name__ == '__main__':
    main()

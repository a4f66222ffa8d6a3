#!/usr/bin/env python3
"""
Launcher script to run the simulation with a live WebSocket feed

Runs the WebSocket server in a background thread and the SimPy simulation,
paced against the wall clock, in the main thread. Browsers connected to
ws://localhost:8765 receive every event and may press landing buttons by
sending {"type": "hall_call", "floor": 3, "direction": "DOWN"}.
"""
import asyncio
import threading
import sys
import os
import time

# Add current directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import load_group_control_config, load_simulation_config
from main import setup_simulation
from visualizer.server import VisualizerServer

# Seconds of simulated time between two looks at the browser's button presses
BUTTON_POLL_INTERVAL = 0.1


def run_websocket_server(server):
    """Run WebSocket server in its own asyncio event loop"""
    asyncio.run(server.start())


def button_press_relay(env, building, server):
    """Feed landing calls received from browsers into the building"""
    while True:
        for floor, direction in server.poll_hall_calls():
            try:
                building.request_call(floor, direction)
            except ValueError as e:
                print(f"{env.now:.2f} [Viewer] Rejected hall call: {e}")
        yield env.timeout(BUTTON_POLL_INTERVAL)


def run_simulation(server, sim_config_path, gc_config_path):
    sim_config = load_simulation_config(sim_config_path)
    gc_config = load_group_control_config(gc_config_path)

    if sim_config.realtime_factor <= 0:
        sim_config.realtime_factor = 1.0
    print(f"Simulation speed: {sim_config.realtime_factor}x (1.0 = real-time)")

    ctx = setup_simulation(sim_config, gc_config, websocket_server=server)
    ctx.env.process(button_press_relay(ctx.env, ctx.building, server))

    print("Simulation will run indefinitely (press Ctrl+C to stop)")
    ctx.env.run()


def main():
    sim_config_path = sys.argv[1] if len(sys.argv) > 1 else "scenarios/simulation/office_random.yaml"
    gc_config_path = sys.argv[2] if len(sys.argv) > 2 else "scenarios/group_control/directional_cost.yaml"

    server = VisualizerServer(host='localhost', port=8765)
    ws_thread = threading.Thread(target=run_websocket_server, args=(server,), daemon=True)
    ws_thread.start()

    # Give the server a moment to bind before events start flowing
    time.sleep(1.0)
    print("WebSocket server started on ws://localhost:8765")

    try:
        run_simulation(server, sim_config_path, gc_config_path)
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user (Ctrl+C).")


if __name__ == '__main__':
    main()

#!/usr/bin/env python3
"""
WebSocket Server for the elevator bank viewer

Pushes simulation events (car status, position, doors, hall button
lights) to connected browsers and accepts landing button presses from them.
"""
import asyncio
import websockets
import json
import queue


class VisualizerServer:
    def __init__(self, host='localhost', port=8765):
        self.host = host
        self.port = port
        self.clients = set()
        self.message_queue = queue.Queue()  # simulation thread -> clients
        self.incoming_calls = queue.Queue()  # clients -> simulation thread

    async def register(self, websocket):
        self.clients.add(websocket)
        print(f"Client connected. Total clients: {len(self.clients)}")

    async def unregister(self, websocket):
        self.clients.discard(websocket)
        print(f"Client disconnected. Total clients: {len(self.clients)}")

    async def send_to_client(self, websocket, message):
        try:
            await websocket.send(json.dumps(message))
        except websockets.exceptions.ConnectionClosed:
            await self.unregister(websocket)

    async def broadcast(self, message):
        """Send message to all connected clients, dropping closed ones"""
        disconnected = set()
        for client in list(self.clients):
            try:
                await client.send(json.dumps(message))
            except websockets.exceptions.ConnectionClosed:
                disconnected.add(client)

        for client in disconnected:
            await self.unregister(client)

    def handle_client_message(self, data):
        """
        Returns the reply for the client, or None.

        {'type': 'hall_call', 'floor': int, 'direction': 'UP'|'DOWN'} queues a
        landing call for the simulation thread.
        """
        if data.get('type') == 'ping':
            return {'type': 'pong'}

        if data.get('type') == 'hall_call':
            floor = data.get('floor')
            direction = data.get('direction')
            if not isinstance(floor, int) or direction not in ('UP', 'DOWN'):
                return {'type': 'error', 'message': f"Invalid hall call: {data}"}
            self.incoming_calls.put((floor, direction))
            return {'type': 'ack', 'floor': floor, 'direction': direction}

        return {'type': 'error', 'message': f"Unknown message type: {data.get('type')}"}

    async def handle_client(self, websocket):
        await self.register(websocket)
        try:
            async for message in websocket:
                try:
                    data = json.loads(message)
                except json.JSONDecodeError:
                    await self.send_to_client(websocket, {'type': 'error', 'message': 'Invalid JSON'})
                    continue
                reply = self.handle_client_message(data)
                if reply is not None:
                    await self.send_to_client(websocket, reply)
        except websockets.exceptions.ConnectionClosed:
            pass
        finally:
            await self.unregister(websocket)

    async def message_sender(self):
        """Drain the thread-safe queue into broadcasts"""
        while True:
            try:
                message = self.message_queue.get_nowait()
                await self.broadcast(message)
            except queue.Empty:
                await asyncio.sleep(0.01)

    def queue_message(self, message):
        """Queue a message to be sent (thread-safe, called by Statistics)"""
        self.message_queue.put(message)

    def poll_hall_calls(self):
        """Take every landing call received so far (thread-safe)"""
        calls = []
        while True:
            try:
                calls.append(self.incoming_calls.get_nowait())
            except queue.Empty:
                return calls

    async def start(self):
        print(f"Starting WebSocket server on ws://{self.host}:{self.port}")
        asyncio.create_task(self.message_sender())
        async with websockets.serve(self.handle_client, self.host, self.port):
            await asyncio.Future()  # Run forever


async def main():
    server = VisualizerServer(host='localhost', port=8765)
    await server.start()


if __name__ == '__main__':
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nServer stopped.")

"""Run a plugin against a mock Stream Deck application.

This script:
1. Starts a websocket server on a free local port
2. Launches the plugin with the arguments the Stream Deck application would pass
3. Waits for it to register, then replays key presses on a single action instance
4. Prints all traffic

Example:

    python mock_host.py -- python examples/01_counter.py
"""

import subprocess
import time
from typing import List

import rich
import tyro

from streamdeck_plugin.testing import MockHost


def main(
    command: tyro.conf.Positional[List[str]],
    plugin_uuid: str = "com.example.plugin",
    action: str = "com.example.plugin.action",
    presses: int = 3,
    interval: float = 0.5,
    timeout: float = 10.0,
) -> None:
    with MockHost(verbose=True) as host:
        args = host.launch_args(plugin_uuid)
        rich.print(f"[bold](host)[/bold] Launching {' '.join(command)} on port {host.get_port()}")
        process = subprocess.Popen([*command, *args])
        try:
            host.wait_for_registration(timeout=timeout)

            context = "mock-context"
            common = {
                "action": action,
                "context": context,
                "device": "55F16B35884A859CCE4FFA1FC8D3DE5B",
            }
            payload = {
                "settings": {},
                "coordinates": {"column": 0, "row": 0},
                "isInMultiAction": False,
            }
            host.send({"event": "willAppear", **common, "payload": payload})
            for _ in range(presses):
                time.sleep(interval)
                host.send({"event": "keyDown", **common, "payload": payload})
                host.send({"event": "keyUp", **common, "payload": payload})

            # Give the plugin a moment to answer the last press.
            time.sleep(interval)
            host.send({"event": "willDisappear", **common, "payload": payload})
            host.disconnect()
            process.wait(timeout=timeout)
        finally:
            if process.poll() is None:
                process.terminate()
                process.wait()
    rich.print(f"[bold](host)[/bold] Plugin exited with code {process.returncode}")


if __name__ == "__main__":
    tyro.cli(main)

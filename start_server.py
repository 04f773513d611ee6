#!/usr/bin/env python3
"""Start script that handles the PORT environment variable and launches uvicorn."""

import os
import sys
import subprocess

# Get PORT from environment, default to 8000
port = os.environ.get("PORT", "8000")

try:
    port_int = int(port)
except ValueError:
    print(f"Warning: Invalid PORT value '{port}', using default 8000", file=sys.stderr)
    port_int = 8000

# Put src on PYTHONPATH so `fieldplan` imports as a top-level package
cwd = os.getcwd()
src_path = os.path.join(cwd, "src")
if not os.path.isdir(src_path):
    print(f"Warning: src directory not found at {src_path}", file=sys.stderr)
    src_path = cwd

pythonpath = os.environ.get("PYTHONPATH", "")
os.environ["PYTHONPATH"] = f"{src_path}:{pythonpath}" if pythonpath else src_path
sys.path.insert(0, src_path)

# Check if the app module can be imported before starting
try:
    import fieldplan.main
    from fieldplan.config import settings
except ImportError as e:
    print(f"Failed to import fieldplan.main (ImportError): {e}", file=sys.stderr)
    print(f"   PYTHONPATH: {os.environ.get('PYTHONPATH', 'NOT SET')}", file=sys.stderr)
    import traceback
    traceback.print_exc(file=sys.stderr)
    sys.exit(1)

cmd = [
    sys.executable,
    "-m",
    "uvicorn",
    "fieldplan.main:app",
    "--host",
    "0.0.0.0",
    "--port",
    str(port_int),
    "--log-level",
    settings.log_level,
    "--proxy-headers",
    "--forwarded-allow-ips", "*",
]

print(f"Starting server on port {port_int}...", file=sys.stderr)
try:
    result = subprocess.call(cmd)
    if result != 0:
        print(f"Uvicorn exited with code {result}", file=sys.stderr)
    sys.exit(result)
except KeyboardInterrupt:
    print("Server interrupted by user", file=sys.stderr)
    sys.exit(0)

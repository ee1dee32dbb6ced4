"""
Service status checker
Checks that the cart offer app and the mock segment server are up

Steps:
- TCP probe of each service port, then an HTTP request to its status URL
- Which process holds each port (lsof / ps)
- Running Docker containers
- Summary; the exit code is the number of services needing attention
"""

import argparse
import shutil
import socket
import subprocess
import sys
from dataclasses import dataclass
from typing import Callable, List, Optional
import requests

from ..config import settings


@dataclass
class ServiceTarget:
    """A service to check"""
    name: str
    url: str
    port: int
    short_name: str
    start_hint: str


@dataclass
class ServiceStatus:
    """Result of checking one service"""
    target: ServiceTarget
    port_open: bool
    http_ok: bool = False
    
    @property
    def ok(self) -> bool:
        return self.port_open and self.http_ok
    
    def describe(self) -> str:
        if not self.port_open:
            return f"DOWN (port {self.target.port} not listening)"
        if self.http_ok:
            return "UP and responding"
        return "UP but not responding to HTTP"


def default_targets(host: str = "localhost", app_port: int = None,
                    mock_port: int = None) -> List[ServiceTarget]:
    app_port = app_port or settings.app_port
    mock_port = mock_port or settings.mock_server_port
    return [
        ServiceTarget(
            name="Mock Server",
            url=f"http://{host}:{mock_port}/mockserver/status",
            port=mock_port,
            short_name="Mock Server",
            start_hint="cd mockserver && docker-compose up -d"
        ),
        ServiceTarget(
            name="Cart Offer App",
            url=f"http://{host}:{app_port}/health",
            port=app_port,
            short_name="Cart Offer",
            start_hint=f"uvicorn cartoffer.app:app --port {app_port}"
        ),
    ]


class ServiceChecker:
    """Probes ports, HTTP endpoints, port owners and Docker"""
    
    def __init__(self, host: str = "localhost", session: requests.Session = None,
                 runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
                 connect_timeout: float = 3, read_timeout: float = 5):
        self.host = host
        self.session = session or requests.Session()
        self.runner = runner
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
    
    def is_port_open(self, port: int) -> bool:
        try:
            with socket.create_connection((self.host, port), timeout=self.connect_timeout):
                return True
        except OSError:
            return False
    
    def is_http_responding(self, url: str) -> bool:
        """Any HTTP response counts; only transport failures do not"""
        try:
            self.session.get(url, timeout=(self.connect_timeout, self.read_timeout))
            return True
        except requests.RequestException:
            return False
    
    def check_service(self, target: ServiceTarget) -> ServiceStatus:
        if not self.is_port_open(target.port):
            return ServiceStatus(target, port_open=False)
        return ServiceStatus(target, port_open=True, http_ok=self.is_http_responding(target.url))
    
    def _run(self, cmd: List[str]) -> Optional[subprocess.CompletedProcess]:
        try:
            return self.runner(cmd, capture_output=True, text=True, timeout=10)
        except (OSError, subprocess.TimeoutExpired):
            return None
    
    def port_owner(self, port: int) -> Optional[str]:
        """'Active (PID: n, Process: name)', 'Active', or None when nothing listens"""
        result = self._run(["lsof", "-i", f":{port}", "-t"])
        if result is None or result.returncode != 0:
            return None
        
        pids = result.stdout.strip().splitlines()
        if not pids:
            return "Active"
        pid = pids[0].strip()
        
        ps = self._run(["ps", "-p", pid, "-o", "comm="])
        process_name = ps.stdout.strip().splitlines()[0] if ps and ps.stdout.strip() else ""
        return f"Active (PID: {pid}, Process: {process_name})"
    
    def docker_status(self) -> List[str]:
        if shutil.which("docker") is None:
            return ["Docker not installed"]
        
        info = self._run(["docker", "info"])
        if info is None or info.returncode != 0:
            return ["Docker daemon not running"]
        
        ids = self._run(["docker", "ps", "-q"])
        if ids is None or not ids.stdout.strip():
            return ["No containers running"]
        
        table = self._run([
            "docker", "ps", "--format",
            "table {{.Names}}\t{{.Status}}\t{{.Ports}}"
        ])
        if table is None:
            return ["No containers running"]
        return table.stdout.rstrip("\n").splitlines()[:10]


def run_checks(checker: ServiceChecker, targets: List[ServiceTarget],
               out: Callable[[str], None] = print) -> int:
    """Print the full report and return the number of failing services"""
    out("Checking service status...")
    out("")
    
    statuses = []
    for target in targets:
        status = checker.check_service(target)
        statuses.append(status)
        out(f"{target.name + ':':<25}{status.describe()}")
    
    out("")
    out("Port details:")
    out("-------------")
    for target in targets:
        owner = checker.port_owner(target.port) or "No process listening"
        out(f"Port {target.port:<4} ({target.short_name:<12}): {owner}")
    
    out("")
    out("Docker containers:")
    out("------------------")
    for line in checker.docker_status():
        out(line)
    
    out("")
    out("Summary:")
    out("--------")
    failing = [s for s in statuses if not s.ok]
    for status in failing:
        out(f"- {status.target.name} needs attention")
    
    if not failing:
        out("All services are running normally")
    else:
        out(f"{len(failing)} service(s) need attention")
        out("")
        out("To start services:")
        for status in failing:
            out(f"  {status.target.name}: {status.target.start_hint}")
    
    return len(failing)


def main(argv: List[str] = None) -> int:
    parser = argparse.ArgumentParser(description="Check cart offer services")
    parser.add_argument("--host", default=settings.app_host)
    parser.add_argument("--app-port", type=int, default=settings.app_port)
    parser.add_argument("--mock-port", type=int, default=settings.mock_server_port)
    args = parser.parse_args(argv)
    
    checker = ServiceChecker(host=args.host)
    targets = default_targets(args.host, args.app_port, args.mock_port)
    return run_checks(checker, targets)


if __name__ == "__main__":
    sys.exit(main())

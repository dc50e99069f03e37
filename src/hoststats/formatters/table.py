"""Table formatter for human-readable output."""

from __future__ import annotations

from typing import Any

from ..utils import na
from .base import BaseFormatter

WIDTH = 80
LABEL_WIDTH = 30

# ANSI escapes
_RESET = "\033[0m"
_COLORS = {
    "header": "\033[1;37m",
    "info": "\033[0;36m",
    "section": "\033[1;33m",
    "label": "\033[0;32m",
    "error": "\033[0;31m",
}


class TableFormatter(BaseFormatter):
    """Format report as sectioned, human-readable text."""

    def _c(self, kind: str, text: str) -> str:
        if not self.color:
            return text
        return f"{_COLORS[kind]}{text}{_RESET}"

    def _row(self, label: str, value: str) -> str:
        return f"{self._c('label', f'{label:<{LABEL_WIDTH}}')} {value}"

    def _section(self, lines: list[str], title: str) -> None:
        lines.append(self._c("section", title))
        lines.append(self._c("section", "-" * WIDTH))

    def _error(self, lines: list[str], section: dict[str, Any]) -> bool:
        if "error" in section:
            lines.append(self._c("error", f"  Error: {section['error']}"))
            lines.append("")
            return True
        return False

    def format(self, report: dict[str, Any]) -> str:
        lines: list[str] = []
        sys_info = report.get("system", {})

        # Header
        lines.append(self._c("header", "=" * WIDTH))
        lines.append(self._c("header", "HOST STATISTICS REPORT".center(WIDTH).rstrip()))
        lines.append(self._c("header", "=" * WIDTH))
        lines.append(self._c("info", f"Report Generated: {report.get('timestamp', 'N/A')}"))
        if sys_info and "error" not in sys_info:
            lines.append(self._c("info", f"Hostname: {sys_info.get('fqdn') or sys_info.get('hostname', 'N/A')}"))
            lines.append(self._c("info", f"Server IP: {na(sys_info.get('ip'))}"))
        lines.append("")

        if "system" in report:
            self._system(lines, report["system"])
        if "cpu" in report:
            self._cpu(lines, report["cpu"])
        if "memory" in report:
            self._memory(lines, report["memory"])
        if "disk" in report:
            self._disk(lines, report["disk"])
        if "processes" in report:
            self._processes(lines, report["processes"])
        if "users" in report:
            self._users(lines, report["users"])
        if "security" in report:
            self._security(lines, report["security"])
        if "network" in report:
            self._network(lines, report["network"])

        lines.append(self._c("header", "=" * WIDTH))
        lines.append(self._c("header", "END OF HOST STATISTICS REPORT".center(WIDTH).rstrip()))
        lines.append(self._c("header", "=" * WIDTH))

        return "\n".join(lines)

    def _system(self, lines: list[str], info: dict[str, Any]) -> None:
        self._section(lines, "SYSTEM INFORMATION")
        if self._error(lines, info):
            return
        lines.append(self._row("Operating System:", na(info.get("os"))))
        lines.append(self._row("OS Version:", na(info.get("os_version"))))
        lines.append(self._row("Kernel Version:", na(info.get("kernel"))))
        lines.append(self._row("Architecture:", na(info.get("architecture"))))
        lines.append(self._row("System Uptime:", na(info.get("uptime_human"))))
        lines.append(self._row("Last Boot:", na(info.get("boot_time"))))
        lines.append("")

    def _cpu(self, lines: list[str], cpu: dict[str, Any]) -> None:
        self._section(lines, "CPU USAGE STATISTICS")
        if self._error(lines, cpu):
            return
        usage = cpu.get("usage", {})
        status = usage.get("status")
        suffix = " (approximate)" if status == "approximate" else ""
        lines.append(self._row("Total CPU Usage:", f"{na(usage.get('busy'), '{:6.1f}')}%{suffix}"))
        lines.append(self._row("User CPU Usage:", f"{na(usage.get('user'), '{:6.1f}')}%"))
        lines.append(self._row("System CPU Usage:", f"{na(usage.get('system'), '{:6.1f}')}%"))
        lines.append(self._row("I/O Wait:", f"{na(usage.get('iowait'), '{:6.1f}')}%"))
        lines.append(self._row("Steal:", f"{na(usage.get('steal'), '{:6.1f}')}%"))
        lines.append(self._row("CPU Source:", usage.get("source") or "N/A"))
        if "count_logical" in cpu:
            lines.append(self._row("CPU Cores:", na(cpu.get("count_logical"))))
            lines.append(self._row("CPU Model:", cpu.get("model") or "Unknown"))
        if "loadavg" in cpu:
            loadavg = cpu.get("loadavg")
            if loadavg:
                load = f"{loadavg['1m']:.2f} / {loadavg['5m']:.2f} / {loadavg['15m']:.2f}"
            else:
                load = "N/A"
            lines.append(self._row("Load Average (1/5/15min):", load))
        lines.append("")

    def _memory(self, lines: list[str], mem: dict[str, Any]) -> None:
        self._section(lines, "MEMORY USAGE STATISTICS")
        if self._error(lines, mem):
            return
        lines.append(self._row("Total Memory:", mem.get("total_human", "N/A")))
        lines.append(
            self._row("Used Memory:", f"{mem.get('used_human', 'N/A')} ({mem.get('used_percent', 0):.1f}%)")
        )
        lines.append(
            self._row(
                "Available Memory:",
                f"{mem.get('available_human', 'N/A')} ({mem.get('available_percent', 0):.1f}%)",
            )
        )
        lines.append(self._row("Buffers:", mem.get("buffers_human", "N/A")))
        lines.append(self._row("Cached:", mem.get("cached_human", "N/A")))
        lines.append(self._row("Shared:", mem.get("shared_human", "N/A")))
        lines.append("")
        lines.append(self._row("Total Swap:", mem.get("swap_total_human", "N/A")))
        lines.append(
            self._row(
                "Used Swap:", f"{mem.get('swap_used_human', 'N/A')} ({mem.get('swap_percent', 0):.1f}%)"
            )
        )
        lines.append(self._row("Free Swap:", mem.get("swap_free_human", "N/A")))
        lines.append("")

    def _disk(self, lines: list[str], disk: dict[str, Any]) -> None:
        self._section(lines, "DISK USAGE STATISTICS")
        if self._error(lines, disk):
            return
        lines.append(
            self._c(
                "label",
                f"{'Filesystem':<20} {'Size':>10} {'Used':>10} {'Avail':>10} {'Use%':>6}  Mounted on",
            )
        )
        for p in disk.get("partitions", []):
            lines.append(
                f"{p.get('device', 'N/A')[:20]:<20} {p.get('total_human', 'N/A'):>10} "
                f"{p.get('used_human', 'N/A'):>10} {p.get('free_human', 'N/A'):>10} "
                f"{p.get('percent', 0):>5.1f}%  {p.get('mountpoint', 'N/A')}"
            )
        lines.append("")
        lines.append(self._row("Total Mounted Filesystems:", str(disk.get("mounted", 0))))
        lines.append(self._row("Root Inode Usage:", f"{na(disk.get('root_inode_percent'), '{:.1f}')}%"))
        lines.append("")

    def _process_table(self, lines: list[str], rows: list[dict[str, Any]], first: str) -> None:
        second = "memory_percent" if first == "cpu_percent" else "cpu_percent"
        h1, h2 = ("CPU%", "MEM%") if first == "cpu_percent" else ("MEM%", "CPU%")
        lines.append(self._c("label", f"{'PID':<8} {'USER':<16} {h1:>6} {h2:>6}  COMMAND"))
        for p in rows:
            lines.append(
                f"{p.get('pid', 0):<8} {p.get('user', '?'):<16} "
                f"{p.get(first, 0):>6.1f} {p.get(second, 0):>6.1f}  {p.get('command', '')}"
            )
        lines.append("")

    def _processes(self, lines: list[str], procs: dict[str, Any]) -> None:
        self._section(lines, "TOP PROCESSES BY CPU USAGE")
        if self._error(lines, procs):
            return
        self._process_table(lines, procs.get("top_by_cpu", []), "cpu_percent")
        self._section(lines, "TOP PROCESSES BY MEMORY USAGE")
        self._process_table(lines, procs.get("top_by_memory", []), "memory_percent")

    def _users(self, lines: list[str], users: dict[str, Any]) -> None:
        self._section(lines, "USER ACTIVITY")
        if self._error(lines, users):
            return
        lines.append(self._c("label", "Currently Logged In Users:"))
        lines.append(self._c("label", f"{'USER':<16} {'TTY':<12} {'LOGIN TIME':<17} FROM"))
        for s in users.get("sessions", []):
            lines.append(f"{s['name']:<16} {s['terminal']:<12} {s['started'][:16]:<17} {s['host']}")
        lines.append("")
        lines.append(self._row("Active User Sessions:", str(users.get("session_count", 0))))
        lines.append(self._row("Unique Users:", str(users.get("unique_users", 0))))
        lines.append(self._row("Root Sessions:", str(users.get("root_sessions", 0))))
        lines.append("")

    def _security(self, lines: list[str], sec: dict[str, Any]) -> None:
        self._section(lines, "SECURITY INFORMATION")
        if self._error(lines, sec):
            return
        if sec.get("available"):
            lines.append(self._c("label", f"Recent Authentication Events (Last {len(sec.get('recent', []))}):"))
            for line in sec.get("recent", []):
                lines.append(f"  {line}")
            lines.append("")
        else:
            lines.append("Authentication log not accessible")
        lines.append(self._row("Failed Logins Today:", na(sec.get("failed_logins"))))
        lines.append(self._row("Successful Logins Today:", na(sec.get("successful_logins"))))
        lines.append(self._row("Sudo Commands Today:", na(sec.get("sudo_commands"))))
        lines.append("")

    def _network(self, lines: list[str], net: dict[str, Any]) -> None:
        self._section(lines, "NETWORK INFORMATION")
        if self._error(lines, net):
            return
        lines.append(self._c("label", "Active Network Interfaces:"))
        for iface in net.get("interfaces", []):
            lines.append(f"  {iface['name']:<16} {na(iface.get('address')):<20} {iface.get('status', 'N/A')}")
        lines.append("")
        lines.append(self._row("TCP Connections:", na(net.get("tcp_established"))))
        lines.append(self._row("Listening Ports:", na(net.get("tcp_listening"))))
        lines.append("")

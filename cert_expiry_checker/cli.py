"""
命令行入口
"""
import sys
from typing import Optional, Tuple

import click

from .errors import ConfigError
from .models import MonitorConfig, CheckStatus, DEFAULT_DAYS, DEFAULT_CONCURRENCY, DEFAULT_TIMEOUT
from .monitor import CertificateExpiryMonitor
from .services.domain_config import HostListLoader
from .services.logger import LoggerService


# 参见 sysexits(3)，命令使用方式错误
EX_USAGE = 64
EX_CHECK_FAILED = 1


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("hosts", nargs=-1)
@click.option("--hosts", "hosts_file", type=click.Path(dir_okay=False),
              help="Path of file containing hostnames to check.")
@click.option("--days", type=int, default=DEFAULT_DAYS, show_default=True,
              help="Number of days to look into the future.")
@click.option("--concurrency", type=int, default=DEFAULT_CONCURRENCY, show_default=True,
              help="Concurrent checks.")
@click.option("--timeout", type=float, default=DEFAULT_TIMEOUT, show_default=True,
              help="Connect and handshake timeout in seconds.")
@click.option("--sns-topic-arn", envvar="SNS_TOPIC_ARN",
              help="Publish a report of failing hosts to this SNS topic.")
@click.option("--log-level", envvar="LOG_LEVEL", default="WARNING", show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
def main(
    hosts: Tuple[str, ...],
    hosts_file: Optional[str],
    days: int,
    concurrency: int,
    timeout: float,
    sns_topic_arn: Optional[str],
    log_level: str,
) -> None:
    """Checks HOSTS for TLS certificates expiring within the look-ahead window."""
    logger_service = LoggerService(log_level=log_level)

    try:
        hostnames = HostListLoader().get_hosts(hosts, hosts_file)
        config = MonitorConfig(
            hostnames=tuple(hostnames),
            days=days,
            concurrency=concurrency,
            timeout=timeout,
            sns_topic_arn=sns_topic_arn or None,
        )
        monitor = CertificateExpiryMonitor(config, logger_service=logger_service)
        result = monitor.execute()
    except ConfigError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(EX_USAGE)

    for line in result.report_lines():
        click.echo(line, err=True)

    if result.status is CheckStatus.FAIL:
        sys.exit(EX_CHECK_FAILED)


if __name__ == "__main__":
    main()

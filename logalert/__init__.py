"""Log alert management service: log alerts materialized as Zabbix items."""

__version__ = "1.0.0"

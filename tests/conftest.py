from __future__ import annotations

import pytest

from whichport.models import Listener

SS_SAMPLE = (
    "LISTEN 0 128 *:22 *:*\n"
    'LISTEN 0 4096 127.0.0.53%lo:53 0.0.0.0:* users:(("systemd-resolve",pid=728,fd=14))\n'
    'LISTEN 0 511 [::]:443 [::]:* users:(("nginx",pid=1000,fd=7))\n'
)

LSOF_SAMPLE = (
    "p123\n"
    "cpostgres\n"
    "u501\n"
    "Lrexfelix\n"
    "f7\n"
    "n127.0.0.1:5432\n"
    "TST=LISTEN\n"
    "f8\n"
    "n[::1]:5432\n"
    "TST=LISTEN\n"
    "p456\n"
    "cnginx\n"
    "u0\n"
    "f6\n"
    "n*:80\n"
    "f7\n"
    "n[::]:80\n"
)


@pytest.fixture
def ss_sample() -> str:
    return SS_SAMPLE


@pytest.fixture
def lsof_sample() -> str:
    return LSOF_SAMPLE


@pytest.fixture
def nginx_pair() -> list[Listener]:
    return [
        Listener(port=80, pid=10, command="nginx", user="root", endpoint="[::]:80"),
        Listener(port=80, pid=10, command="nginx", user="root", endpoint="*:80"),
    ]

[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "netbench"
version = "0.1.0"
description = "Small network tools, games and text utilities: chat, FTP, ping, port forwarding, UDP, tic-tac-toe, a URL shortener, SHA-512 and a toy expression compiler."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "networking",
    "sockets",
    "chat",
    "ftp",
    "ping",
    "icmp",
    "udp",
    "port-forwarding",
    "tic-tac-toe",
    "url-shortener",
    "sha512",
    "lexer",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Internet",
    "Topic :: Games/Entertainment :: Board Games",
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
netbench-sha512 = "netbench.sha512:main"
netbench-calc = "netbench.arithmetic:main"
netbench-lexer = "netbench.lexer:main"
netbench-asteroids = "netbench.asteroids:main"
netbench-chat-server = "netbench.chat:server_main"
netbench-chat-client = "netbench.chat:client_main"
netbench-udp-server = "netbench.udp:server_main"
netbench-udp-client = "netbench.udp:client_main"
netbench-shortener = "netbench.shortener:main"
netbench-ping = "netbench.ping:main"
netbench-forward = "netbench.forwarder:main"
netbench-ftp-server = "netbench.ftp_server:main"
netbench-ftp-client = "netbench.ftp_client:main"
netbench-ttt-server = "netbench.tictactoe_server:main"
netbench-ttt-client = "netbench.tictactoe_client:main"

[tool.hatch.build.targets.wheel]
packages = ["netbench"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true

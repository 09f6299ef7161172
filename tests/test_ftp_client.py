import io
import socket
import threading

import pytest

from netbench.ftp_client import FtpClient, list_local_files, main, print_help
from netbench.ftp_protocol import SIZE_HEADER, FtpError
from netbench.ftp_server import serve


def _recv_exactly(sock, size):
    data = b""
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            break
        data += chunk
    return data


@pytest.fixture
def pair(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    server_end, client_end = socket.socketpair()
    server_end.settimeout(5)
    client_end.settimeout(5)
    server_end.sendall(b"200 FTP Server Ready\n")
    client = FtpClient(client_end)
    yield server_end, client
    client.__exit__(None, None, None)
    server_end.close()


def test_greeting_is_read(pair):
    _, client = pair
    assert client.greeting == "200 FTP Server Ready"


def test_list_remote(pair):
    server_end, client = pair
    server_end.sendall(b"200 File list follows\na.txt\nb.txt\n")
    assert client.list_remote() == "a.txt\nb.txt\n"
    assert server_end.recv(100) == b"LIST"


def test_get_downloads_file(pair, tmp_path):
    server_end, client = pair
    content = b"Hello from server!\n"
    server_end.sendall(b"200 Sending file\n" + SIZE_HEADER.pack(len(content)) + content)
    assert client.get("server_readme.txt") == len(content)
    assert (tmp_path / "server_readme.txt").read_bytes() == content
    assert server_end.recv(100) == b"RETR server_readme.txt"


def test_get_refused(pair, tmp_path):
    server_end, client = pair
    server_end.sendall(b"404 File not found\n")
    with pytest.raises(FtpError, match="404 File not found"):
        client.get("missing.txt")
    assert not (tmp_path / "missing.txt").exists()


def test_put_uploads_file(pair, tmp_path):
    server_end, client = pair
    content = b"This file will be uploaded to server.\n"
    (tmp_path / "upload_me.txt").write_bytes(content)
    server_end.sendall(b"200 Ready to receive\n")
    assert client.put("upload_me.txt") == len(content)
    expected = b"STOR upload_me.txt" + SIZE_HEADER.pack(len(content)) + content
    assert _recv_exactly(server_end, len(expected)) == expected


def test_put_missing_local_file_sends_nothing(pair):
    server_end, client = pair
    with pytest.raises(FileNotFoundError):
        client.put("missing.txt")
    server_end.setblocking(False)
    with pytest.raises(BlockingIOError):
        server_end.recv(100)


def test_quit(pair):
    server_end, client = pair
    server_end.sendall(b"200 Goodbye\n")
    assert client.quit() == "200 Goodbye"
    assert server_end.recv(100) == b"QUIT"


def test_run_command_blank_line(pair, capsys):
    _, client = pair
    assert client.run_command("   ") is True
    assert capsys.readouterr().out == ""


def test_run_command_help(pair, capsys):
    _, client = pair
    assert client.run_command("help") is True
    assert "  get <file>  - Download file from server\n" in capsys.readouterr().out


def test_run_command_unknown(pair, capsys):
    _, client = pair
    assert client.run_command("bogus") is True
    assert capsys.readouterr().out == "Unknown command. Type 'help' for available commands.\n"


def test_run_command_get_without_filename(pair, capsys):
    _, client = pair
    client.run_command("get")
    assert capsys.readouterr().out == "Usage: get <filename>\n"


def test_run_command_put_missing(pair, capsys):
    _, client = pair
    client.run_command("put missing.txt")
    assert capsys.readouterr().out == "Local file 'missing.txt' not found\n"


def test_run_command_ls(pair, capsys):
    server_end, client = pair
    server_end.sendall(b"200 File list follows\na.txt\n")
    client.run_command("ls")
    assert capsys.readouterr().out == "Server files:\na.txt\n"


def test_run_command_ls_error(pair, capsys):
    server_end, client = pair
    server_end.sendall(b"500 Cannot list directory\n")
    client.run_command("ls")
    assert capsys.readouterr().out == "Error: 500 Cannot list directory\n"


def test_run_command_get_reports_success(pair, capsys):
    server_end, client = pair
    content = b"data"
    server_end.sendall(b"200 Sending file\n" + SIZE_HEADER.pack(len(content)) + content)
    client.run_command("get data.txt")
    assert "File 'data.txt' downloaded successfully\n" in capsys.readouterr().out


def test_run_command_quit_ends_session(pair, capsys):
    server_end, client = pair
    server_end.sendall(b"200 Goodbye\n")
    assert client.run_command("quit") is False
    assert capsys.readouterr().out == "200 Goodbye\n"


def test_print_help(capsys):
    print_help()
    out = capsys.readouterr().out
    assert out.startswith("\nAvailable commands:\n")
    assert out.endswith("  quit        - Exit client\n\n")


def test_list_local_files(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.conf").write_text("Client configuration file.\n")
    (tmp_path / ".hidden").write_text("x")
    list_local_files()
    assert capsys.readouterr().out == "Local files:\nconfig.conf\n"


def test_main_without_arguments(capsys):
    assert main([]) == 1
    assert "<server_ip> [port]" in capsys.readouterr().out


def test_main_rejects_bad_address(capsys):
    assert main(["not-an-ip"]) == 1
    assert capsys.readouterr().out == "Invalid server IP address\n"


def test_main_session_against_server(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(5)
    port = listener.getsockname()[1]
    threading.Thread(target=serve, args=(listener,), daemon=True).start()
    monkeypatch.setattr("sys.stdin", io.StringIO("quit\n"))
    try:
        assert main(["127.0.0.1", str(port)]) == 0
    finally:
        try:
            listener.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        listener.close()
    out = capsys.readouterr().out
    assert "200 FTP Server Ready\n" in out
    assert "200 Goodbye\n" in out
    assert out.endswith("Connection closed.\n")
# FlameArena/flamearena/utils.py
import os
import socket
from io import StringIO

import qrcode


def get_local_ip():
    """Return the best local IPv4 for reaching peers on the network.

    Order of preference:
      1) SERVER_IP env var override (for container/static configs)
      2) UDP socket trick to an external address (no traffic sent)
      3) Address the hostname resolves to
      4) Fallback to 127.0.0.1
    """
    # 1) Env override
    env_ip = os.environ.get('SERVER_IP')
    if env_ip:
        return env_ip

    # 2) Discover via UDP socket (does not actually send data)
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            s.connect(("8.8.8.8", 80))
            ip = s.getsockname()[0]
            if ip and not ip.startswith('127.'):
                return ip
    except OSError:
        pass

    # 3) Hostname lookup
    try:
        ip = socket.gethostbyname(socket.gethostname())
        if ip and not ip.startswith('127.'):
            return ip
    except OSError:
        pass

    # 4) Last resort
    return '127.0.0.1'


def join_url(host: str, port: int) -> str:
    if host in ('0.0.0.0', '', '::'):
        host = get_local_ip()
    return f"http://{host}:{port}/"


def render_qr_ascii(url: str) -> str:
    qr = qrcode.QRCode(border=1)
    qr.add_data(url)
    qr.make(fit=True)
    buf = StringIO()
    qr.print_ascii(out=buf, invert=True)
    return buf.getvalue()

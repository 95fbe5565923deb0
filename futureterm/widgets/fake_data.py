"""Vocabulary pools and generators for the simulated widget content."""

from typing import List

from ..randomness import RandomSource

PROCESSES = [
    "sshd", "nginx", "postgres", "redis", "docker",
    "node", "python3", "java", "rustc", "gcc",
    "systemd", "cron", "kernel", "init", "bash",
    "vim", "tmux", "htop", "curl", "wget",
]

DIRECTORIES = [
    "/usr/bin", "/var/log", "/etc", "/home/user",
    "/opt/app", "/tmp", "/root", "/srv/data",
]

FILES = [
    "config.json", "data.db", "server.log", "auth.key",
    "backup.tar.gz", "index.html", "main.py", "app.js",
]

USERNAMES = [
    "root", "admin", "user", "guest", "daemon",
    "nobody", "www-data", "postgres", "redis", "neo",
]

DRAMATIC_MESSAGES = [
    "ACCESS GRANTED",
    "FIREWALL BYPASSED",
    "ENCRYPTION CRACKED",
    "TARGET ACQUIRED",
    "INTRUSION DETECTED",
    "TRACE INITIATED",
    "PAYLOAD DEPLOYED",
    "BACKDOOR INSTALLED",
    "DATA EXFILTRATION COMPLETE",
    "SYSTEM COMPROMISED",
    "ROOT ACCESS OBTAINED",
    "AUTHENTICATION BYPASSED",
    "PROTOCOL OVERRIDE",
    "SECURITY BREACH",
    "MAINFRAME CONNECTED",
]

OPERATIONS = [
    "DECRYPTING", "ENCRYPTING", "UPLOADING", "DOWNLOADING", "COMPILING",
    "ANALYZING", "SCANNING", "INJECTING", "EXTRACTING", "PROCESSING",
    "DEPLOYING", "SYNCING", "HASHING", "CRACKING", "TUNNELING",
]

# Half-width katakana U+FF66..U+FF9D, digits, then a few symbols
RAIN_CHARS = (
    "".join(chr(c) for c in range(0xFF66, 0xFF9E))
    + "0123456789"
    + "@#$%&*+=<>/\\"
)

CODE_SNIPPETS: List[str] = [
    """fn decrypt_payload(data: &[u8]) -> Result<Vec<u8>> {
    let key = derive_key(MASTER_SECRET);
    let cipher = Aes256Gcm::new(&key);
    cipher.decrypt(data)
}

async fn establish_connection(target: &str) {
    let socket = TcpStream::connect(target).await?;
    let (rx, tx) = socket.split();
    spawn_handler(rx, tx).await;
}""",
    """class NetworkScanner:
    def __init__(self, subnet):
        self.subnet = subnet
        self.targets = []

    async def scan_range(self):
        for ip in self.subnet.hosts():
            if await self.probe(ip):
                self.targets.append(ip)
        return self.targets""",
    """SELECT u.username, a.last_login, p.permissions
FROM users u
JOIN auth_sessions a ON u.id = a.user_id
JOIN permissions p ON u.role_id = p.role_id
WHERE a.active = true
  AND p.level >= 5
ORDER BY a.last_login DESC;""",
    """#!/bin/bash
for host in $(cat targets.txt); do
    nmap -sV -p 22,80,443 $host >> scan.log
    if grep -q "open" scan.log; then
        ./exploit.sh $host &
    fi
done""",
    """void inject_shellcode(HANDLE proc, LPVOID base) {
    SIZE_T written;
    WriteProcessMemory(proc, base, shellcode,
        sizeof(shellcode), &written);
    CreateRemoteThread(proc, NULL, 0,
        (LPTHREAD_START_ROUTINE)base, NULL, 0, NULL);
}""",
]


def random_ip(rng: RandomSource) -> str:
    return (f"{rng.randrange(1, 255)}.{rng.randrange(0, 255)}."
            f"{rng.randrange(0, 255)}.{rng.randrange(1, 255)}")


def random_port(rng: RandomSource) -> int:
    return rng.randrange(1024, 65535)


def random_path(rng: RandomSource) -> str:
    return f"{rng.choice(DIRECTORIES)}/{rng.choice(FILES)}"


def random_process(rng: RandomSource) -> str:
    return rng.choice(PROCESSES)


def random_username(rng: RandomSource) -> str:
    return rng.choice(USERNAMES)


def dramatic_message(rng: RandomSource) -> str:
    return rng.choice(DRAMATIC_MESSAGES)


def random_operation(rng: RandomSource) -> str:
    return rng.choice(OPERATIONS)

# Konfiguration für die Clan-Progression (Umgebungsvariablen mit Defaults)
import os

# JSON-Dokument mit progression.levels; None -> eingebaute Default-Tabelle
LEVELS_PATH = os.environ.get('CLAN_LEVELS_PATH') or None

# Logging
LOG_DIR = os.environ.get('CLAN_LOG_DIR', os.path.join(os.getcwd(), 'logs'))
LOG_LEVEL = os.environ.get('CLAN_LOG_LEVEL', 'INFO').upper()
LOG_MAX_BYTES = int(os.environ.get('CLAN_LOG_MAX_BYTES', str(5 * 1024 * 1024)))
LOG_BACKUPS = int(os.environ.get('CLAN_LOG_BACKUPS', '5'))

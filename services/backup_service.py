"""
Backup Service
Copies of the SQLite database file kept in BACKUP_DIR, optionally encrypted
"""
import os
import shutil
import time
from datetime import datetime, timezone

from flask import current_app

from utils.encryption import EncryptionKeyError, decrypt_bytes, encrypt_bytes
from utils.errors import NotFoundError, ValidationError

BACKUP_EXTENSIONS = ('.db', '.db.enc')
ENCRYPTED_SUFFIX = '.enc'


def _epoch_ms():
    return int(time.time() * 1000)


def _iso_from_timestamp(timestamp):
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()


class BackupService:
    @staticmethod
    def backup_dir():
        path = current_app.config['BACKUP_DIR']
        os.makedirs(path, exist_ok=True)
        return path

    @staticmethod
    def resolve(filename):
        """Absolute path of *filename* inside the backup directory.

        Anything that is not a plain backup filename is rejected.
        """
        if not filename:
            raise ValidationError('Backup filename is required')
        if os.path.basename(filename) != filename or not filename.endswith(BACKUP_EXTENSIONS):
            raise ValidationError('Invalid backup filename')

        backup_dir = os.path.realpath(BackupService.backup_dir())
        path = os.path.realpath(os.path.join(backup_dir, filename))
        if os.path.dirname(path) != backup_dir:
            raise ValidationError('Invalid backup filename')
        return path

    @staticmethod
    def create_backup():
        db_path = current_app.config['DATABASE_PATH']
        if not os.path.exists(db_path):
            raise NotFoundError('Database file not found')

        with open(db_path, 'rb') as handle:
            data = handle.read()

        encrypted = bool(current_app.config.get('BACKUP_ENCRYPTION_ENABLED'))
        if encrypted:
            data = encrypt_bytes(data)

        filename = f'backup-{_epoch_ms()}.db' + (ENCRYPTED_SUFFIX if encrypted else '')
        path = os.path.join(BackupService.backup_dir(), filename)
        with open(path, 'wb') as handle:
            handle.write(data)

        current_app.logger.info(f'Backup created: {filename} ({len(data)} bytes, encrypted={encrypted})')
        return {
            'filename': filename,
            'path': path,
            'encrypted': encrypted,
            'size': len(data),
            'createdAt': datetime.now(timezone.utc).isoformat(),
        }

    @staticmethod
    def restore_backup(filename):
        """Overwrite the database file with a backup.

        The current database is first saved as ``pre-restore-<ms>.db``.
        The running process keeps its open connections, so the app should
        be restarted afterwards.
        """
        path = BackupService.resolve(filename)
        if not os.path.exists(path):
            raise NotFoundError('Backup file not found')

        with open(path, 'rb') as handle:
            data = handle.read()

        if filename.endswith(ENCRYPTED_SUFFIX):
            if not current_app.config.get('ENCRYPTION_KEY'):
                raise EncryptionKeyError()
            data = decrypt_bytes(data)

        db_path = current_app.config['DATABASE_PATH']
        previous = f'pre-restore-{_epoch_ms()}.db'
        if os.path.exists(db_path):
            shutil.copyfile(db_path, os.path.join(BackupService.backup_dir(), previous))
        else:
            previous = None

        with open(db_path, 'wb') as handle:
            handle.write(data)

        current_app.logger.warning(f'Database restored from {filename}; previous copy {previous}')
        return {'restoredFrom': filename, 'previousBackup': previous}

    @staticmethod
    def list_backups():
        backup_dir = BackupService.backup_dir()
        backups = []
        for name in os.listdir(backup_dir):
            if not name.endswith(BACKUP_EXTENSIONS):
                continue
            stats = os.stat(os.path.join(backup_dir, name))
            backups.append({
                'filename': name,
                'encrypted': name.endswith(ENCRYPTED_SUFFIX),
                'size': stats.st_size,
                'createdAt': _iso_from_timestamp(stats.st_mtime),
                '_mtime': stats.st_mtime,
            })

        backups.sort(key=lambda b: (b['_mtime'], b['filename']), reverse=True)
        for backup in backups:
            del backup['_mtime']
        return backups

    @staticmethod
    def delete_backup(filename):
        path = BackupService.resolve(filename)
        if not os.path.exists(path):
            raise NotFoundError('Backup file not found')
        os.remove(path)
        current_app.logger.info(f'Backup deleted: {filename}')

from . import backup_bp
from .forms import RestoreForm
from services.backup_service import BackupService
from utils.api import load_form, success


@backup_bp.route('/create', methods=['POST'])
def create_backup():
    return success(BackupService.create_backup(), 'Backup created successfully')


@backup_bp.route('/restore', methods=['POST'])
def restore_backup():
    form, _ = load_form(RestoreForm)
    result = BackupService.restore_backup(form.filename.data)
    return success(result, 'Database restored successfully. Please restart the application.')


@backup_bp.route('/list', methods=['GET'])
def list_backups():
    backups = BackupService.list_backups()
    return success({'backups': backups, 'count': len(backups)})


@backup_bp.route('/<path:filename>', methods=['DELETE'])
def delete_backup(filename):
    BackupService.delete_backup(filename)
    return success(message='Backup deleted successfully')

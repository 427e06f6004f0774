"""
scqkit client package for submitting OpenQASM programs to the Quafu cloud.
"""

from .config import ScqConfig
from .client import ClientState, ScqClient
from .credentials import read_credential, save_credential
from .models import BackendInfo, BackendsResponse, Credential, ExecResult

__all__ = ['ScqConfig', 'ScqClient', 'ClientState', 'read_credential', 'save_credential',
           'BackendInfo', 'BackendsResponse', 'Credential', 'ExecResult']

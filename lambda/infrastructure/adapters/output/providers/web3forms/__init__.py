"""Web3Forms Email Sender Package"""

from infrastructure.adapters.output.providers.web3forms.web3forms_email_sender import (
    Web3FormsEmailSender,
    get_web3forms_email_sender
)

__all__ = ['Web3FormsEmailSender', 'get_web3forms_email_sender']

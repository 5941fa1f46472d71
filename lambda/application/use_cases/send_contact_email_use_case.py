"""
Use Case: Send Contact Email
"""
from ddtrace import tracer

from application.dtos.requests import ContactRequest
from application.ports.input.send_contact_email_port import ISendContactEmailUseCase
from application.ports.output.email_sender_port import IEmailSender


class SendContactEmailUseCase(ISendContactEmailUseCase):

    def __init__(self, email_sender: IEmailSender):
        self.email_sender = email_sender

    @tracer.wrap(resource="use_case.send_contact_email")
    async def execute(self, request: ContactRequest) -> None:
        await self.email_sender.send(request)

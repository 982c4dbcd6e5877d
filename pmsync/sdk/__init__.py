"""pmsync SDK - note sync between local files and a Gmail label.

This SDK can be used by:
- The pmsync CLI
- Third-party scripts

Example usage:
    from pmsync.sdk import auth, handshake, mail, notes
    from pmsync.sdk.template import FormatTemplate
    from pmsync.sdk.sorting import parse_criteria

    client_config = auth.load_client_config("credentials.json")
    creds = handshake.obtain_credential("token.json", client_config, port=7878)
    store = mail.GmailStore(creds)
    label = mail.resolve_label(store, "Notes/pomera_sync")
    result = notes.fetch_notes(store, label, FormatTemplate("{id} {subject}"),
                               parse_criteria(["-date"]))
    for item in result.items:
        print(item.content)
"""

from . import config
from . import auth
from . import handshake
from . import mail
from . import notes

__all__ = ["config", "auth", "handshake", "mail", "notes"]

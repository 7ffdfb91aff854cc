"""PCC Link Bot - A Slack bot that titles links to the government e-procurement portal.

This package watches Slack messages for links to web.pcc.gov.tw tender pages,
resolves each link to an "agency：subject" title and replies in the thread.

Components:
- main_socket: Socket Mode event listener
- main_ingest: Events API endpoint (FastAPI)
- pipeline: reply orchestration
- retrieval: link extraction, page fetching and title parsing
- slack: Slack API integration
"""

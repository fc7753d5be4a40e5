"""
HTTP application for txledger
"""

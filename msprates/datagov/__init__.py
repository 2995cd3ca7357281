"""data.gov.in: Open Government Data Platform India.

Raw MSP records published by the Commission for Agricultural Costs
and Prices. Field names vary between resources and releases, so the
records go through ``msprates.msp.parser.normalize_records``.
"""

from msprates.datagov.client import fetch_msp_records

__all__ = ["fetch_msp_records"]

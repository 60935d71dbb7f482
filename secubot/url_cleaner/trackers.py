"""Query-string parameters known to carry tracking data."""

TRACKERS: frozenset[str] = frozenset(
    {
        # Google Urchin Tracking Module
        "utm_source",
        "utm_medium",
        "utm_term",
        "utm_campaign",
        "utm_content",
        "utm_name",
        "utm_cid",
        "utm_reader",
        "utm_viz_id",
        "utm_pubreferrer",
        "utm_swu",
        # Adobe Omniture SiteCatalyst
        "ICID",
        "icid",
        # Hubspot
        "_hsenc",
        "_hsmi",
        # Marketo
        "mkt_tok",
        # MailChimp
        "mc_cid",
        "mc_eid",
        # comScore Digital Analytix
        "ns_source",
        "ns_mchannel",
        "ns_campaign",
        "ns_linkname",
        "ns_fee",
        # Simple Reach
        "sr_share",
        # Vero
        "vero_conv",
        "vero_id",
        # Facebook click identifier
        "fbclid",
        # Instagram share identifier
        "igshid",
        "srcid",
        # Google click identifiers
        "gclid",
        "ocid",
        "ncid",
        "nr_email_referer",
        # Generic: Facebook, Product Hunt and others
        "ref",
        # Alibaba-family
        "spm",
    }
)

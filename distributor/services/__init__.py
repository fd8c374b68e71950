"""Service layer: instruction building, referral resolution, settlement."""

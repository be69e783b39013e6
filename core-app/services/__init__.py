"""
Domain operations for assets, staff, accessories, repairs and CCTV.
"""

"""
Database models package.
"""
from models.base import BaseModel
from models.inventory import Asset, Staff, Assignment, Repair
from models.accessories import Accessory, AccessoryLog
from models.cctv import CCTVCamera, CCTVRepair, Premise, Floor

__all__ = [
    'BaseModel', 'Asset', 'Staff', 'Assignment', 'Repair',
    'Accessory', 'AccessoryLog', 'CCTVCamera', 'CCTVRepair', 'Premise', 'Floor',
]

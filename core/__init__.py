"""Map geometry, station data, label layout and name search"""

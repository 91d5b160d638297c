"""
pensum-tracker：学生 pensum、学期、课表和成绩跟踪
"""
__version__ = "1.0.0"

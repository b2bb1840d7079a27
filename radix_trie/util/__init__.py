""" Package for application plumbing that has nothing to do with trees, such as logs and command-line options. """

from helpdesk_widget.cmd.widget import main


if __name__ == "__main__":
    main()
